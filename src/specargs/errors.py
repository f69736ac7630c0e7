"""
Exceptions raised by specargs.

Specification errors are raised while a parser is being built; parse errors
are raised while an argument list is resolved. Both abort immediately and
never return a partial result.
"""

from typing import Any, Optional


class SpecArgError(Exception):
    """Base class for every error raised by specargs."""


class SpecificationError(SpecArgError, ValueError):
    """The option specification itself is invalid."""


class MalformedShortAlias(SpecificationError):
    def __init__(self, alias: str, option: str) -> None:
        self.alias = alias
        self.option = option
        super().__init__(
            f"Short alias '{alias}' of option '{option}' must be exactly one character"
        )


class DuplicateShortAlias(SpecificationError):
    def __init__(self, alias: str, option: str, other: str) -> None:
        self.alias = alias
        self.option = option
        self.other = other
        super().__init__(
            f"Short alias '-{alias}' of option '{option}' is already used by '{other}'"
        )


class ArgumentParseError(SpecArgError):
    """Base class for errors found while resolving an argument list."""


class UnknownOption(ArgumentParseError):
    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"Unknown option {token}")


class UnexpectedValueForSwitch(ArgumentParseError):
    def __init__(self, option: str) -> None:
        self.option = option
        super().__init__(f"Switch '{option}' does not accept a value")


class MissingValueForOption(ArgumentParseError):
    def __init__(self, option: str) -> None:
        self.option = option
        super().__init__(f"Missing value for option '{option}'")


class MissingClusteredArgument(ArgumentParseError):
    def __init__(self, option: str) -> None:
        self.option = option
        super().__init__(
            f"Option '{option}' takes a value and must be last in a short option cluster"
        )


class MissingRequiredOption(ArgumentParseError):
    def __init__(self, option: str) -> None:
        self.option = option
        super().__init__(f"Missing required option '{option}'")


class InvalidOptionValue(ArgumentParseError):
    def __init__(
        self, option: str, value: Any, reason: Optional[str] = None
    ) -> None:
        self.option = option
        self.value = value
        message = f"Invalid value {value!r} for option '{option}'"
        super().__init__(f"{message}: {reason}" if reason else message)
