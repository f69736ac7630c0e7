"""
SpecArgParser - resolve command-line arguments against a declarative option specification.

The parser walks the argument list once, left to right, classifying each token
as an option reference, an option value, a positional argument or the ``--``
end-of-options marker. Once every token is consumed, the final value of each
declared option is materialized from the supplied input, the option's parser,
an optional configuration file and the option's default.
"""

import dataclasses
import logging
import sys
from typing import Any, Iterator, Mapping, Optional, Sequence, Union

from result import Err, Ok, Result

from .errors import (
    InvalidOptionValue,
    MissingClusteredArgument,
    MissingRequiredOption,
    MissingValueForOption,
    SpecificationError,
    UnexpectedValueForSwitch,
    UnknownOption,
)
from .lookup import CompiledLookup, compile_spec
from .spec import MISSING, OptionSpec, Valued, load_data_file, options_from_spec

logger = logging.getLogger(__name__)

END_OF_OPTIONS = "--"

# Leading entries of a host argument vector that are not arguments
# (interpreter and script).
RESERVED_ARGV_ENTRIES = 2


@dataclasses.dataclass
class ParseResult:
    """
    Outcome of a successful parse.

    Attributes:
        opts: Resolved value of every declared option, keyed by canonical
            name. Optional options that were neither supplied nor defaulted
            are absent.
        args: Positional arguments in the order they were encountered.
    """

    opts: dict[str, Any] = dataclasses.field(default_factory=dict)
    args: list[str] = dataclasses.field(default_factory=list)


@dataclasses.dataclass(frozen=True)
class _OptionRef:
    name: str
    value: Any = MISSING


@dataclasses.dataclass(frozen=True)
class _Positional:
    value: str


class SpecArgParser:
    """
    A reusable command-line parser built from an option specification.

    The specification is compiled once at construction; every call to
    ``parse`` reuses the compiled lookup and holds no state between calls.

    Example:
        parser = SpecArgParser(
            {
                "opts": {
                    "count": {"parse": int, "default": 5},
                    "verbose": {"switch": True, "short": "v"},
                }
            }
        )
        result = parser.parse(["-v", "--count", "3", "input.txt"])
        # result.opts == {"count": 3, "verbose": True}
        # result.args == ["input.txt"]
    """

    def __init__(
        self,
        spec: Optional[Mapping[str, Any]] = None,
        *,
        config_flag: Optional[Union[str, list[str], tuple[str, ...]]] = None,
    ) -> None:
        """
        Initialize the parser and compile its lookup table.

        Args:
            spec: ``{"opts": {name: option, ...}}`` where each option is a
                ``Switch``, a ``Valued`` or its plain-data mapping.
            config_flag: Option string(s) (e.g. "--config" or
                ["-c", "--config"]) naming a YAML or JSON file with option
                values. Disabled when None.

        Raises:
            SpecificationError: If the specification is malformed.
        """
        self.options: dict[str, OptionSpec] = options_from_spec(spec)
        self._config_dest: Optional[str] = None

        reserved: dict[str, OptionSpec] = {}
        if config_flag is not None:
            dest, config_option = self._config_option(config_flag)
            reserved[dest] = config_option
            self._config_dest = dest

        self.lookup: CompiledLookup = compile_spec(self.options, reserved)

    @staticmethod
    def _config_option(
        config_flag: Union[str, list[str], tuple[str, ...]],
    ) -> tuple[str, Valued]:
        """
        Build the hidden option carrying the configuration file path.

        Exactly one long form (``--name``) and at most one short form
        (``-c``) may be given.
        """
        # Normalize to sequence of option strings
        if isinstance(config_flag, str):
            names = (config_flag,)
        else:
            names = tuple(config_flag)

        longs = [n for n in names if n.startswith("--")]
        shorts = [n for n in names if not n.startswith("--")]
        if len(longs) != 1 or len(shorts) > 1 or not all(
            n.startswith("-") for n in shorts
        ):
            raise SpecificationError(
                f"Config flag must be one '--name' and at most one '-x' form, got {names!r}"
            )

        dest = longs[0][2:]
        if not dest or "=" in dest:
            raise SpecificationError(f"Invalid config flag: {longs[0]}")
        return dest, Valued(short=shorts[0][1:] if shorts else None)

    def __call__(self, argv: Sequence[str]) -> ParseResult:
        return self.parse_argv(argv)

    def parse_argv(
        self, argv: Sequence[str], reserved: int = RESERVED_ARGV_ENTRIES
    ) -> ParseResult:
        """
        Parse a full host argument vector.

        The first ``reserved`` entries (interpreter and script path by default)
        are dropped before parsing.
        """
        return self.parse(list(argv[reserved:]))

    def parse(self, args: Optional[Sequence[str]] = None) -> ParseResult:
        """
        Parse command-line arguments.

        Args:
            args (Optional[Sequence[str]]): Exactly the arguments to parse. If
                None, uses ``sys.argv[1:]``.

        Returns:
            ParseResult: Resolved option values and positional arguments.

        Raises:
            ArgumentParseError: On unknown options, missing or unexpected
                values, or missing required options.
            FileNotFoundError, ValueError, TypeError: If a configuration file
                is given and cannot be loaded or holds invalid values.
        """
        if args is None:
            args = sys.argv[1:]

        result = ParseResult()
        supplied: dict[str, Any] = {}

        for arg in self._tokenize(args):
            if isinstance(arg, _Positional):
                result.args.append(arg.value)
            elif arg.value is MISSING and arg.name in supplied:
                # A trailing value-less reference keeps the earlier value
                continue
            else:
                # Last reference wins
                supplied[arg.name] = arg.value

        config_data: dict[str, Any] = {}
        if self._config_dest is not None and self._config_dest in supplied:
            config_data = self._load_config_file(supplied.pop(self._config_dest))

        for name, option in self.options.items():
            value = self._resolve_value(name, option, supplied, config_data)
            if value is not MISSING:
                result.opts[name] = value

        logger.debug(
            "Parsed %d option(s) and %d positional(s)",
            len(result.opts),
            len(result.args),
        )
        return result

    def safe_parse(
        self, args: Optional[Sequence[str]] = None
    ) -> Result[ParseResult, str]:
        """
        Safely parse command-line arguments.

        Args:
            args (Optional[Sequence[str]]): Optional list of arguments to parse. If None, uses sys.argv.
        Returns:
            Result[ParseResult, str]:
                - Ok[ParseResult] with the resolved options and positionals,
                - Err with error message if parsing fails.
        """
        try:
            return Ok(self.parse(args))
        except Exception as e:
            return Err(str(e))

    def _tokenize(
        self, args: Sequence[str]
    ) -> Iterator[Union[_OptionRef, _Positional]]:
        """
        Classify tokens in a single pass with one token of lookahead.

        Values are pulled from the same iterator, so a token consumed as a
        value is never interpreted as an option.
        """
        tokens = iter(args)
        parse_options = True

        for token in tokens:
            if not parse_options:
                yield _Positional(token)
            elif token == END_OF_OPTIONS:
                logger.debug("End of options marker, remaining tokens are positional")
                parse_options = False
            elif token.startswith("--"):
                form, sep, inline = token.partition("=")
                name = self.lookup.resolve(form)
                if name is None:
                    raise UnknownOption(token)
                yield self._reference(name, inline if sep else None, tokens)
            elif token.startswith("-") and len(token) > 1:
                yield from self._short_cluster(token, tokens)
            else:
                yield _Positional(token)

    def _short_cluster(
        self, token: str, tokens: Iterator[str]
    ) -> Iterator[_OptionRef]:
        """
        Expand ``-abc`` into references to ``-a``, ``-b`` and ``-c``.

        Every alias but the last must be a switch; the last one may take a
        value from ``=value`` or from the following token.
        """
        body, sep, inline = token[1:].partition("=")
        if not body:
            raise UnknownOption(token)

        names = []
        for char in body:
            name = self.lookup.resolve(f"-{char}")
            if name is None:
                raise UnknownOption(token)
            names.append(name)

        *leading, last = names
        for name in leading:
            if not self.lookup[name].is_switch:
                raise MissingClusteredArgument(name)
            yield _OptionRef(name)
        yield self._reference(last, inline if sep else None, tokens)

    def _reference(
        self, name: str, inline: Optional[str], tokens: Iterator[str]
    ) -> _OptionRef:
        option = self.lookup[name]
        if option.is_switch:
            if inline is not None:
                raise UnexpectedValueForSwitch(name)
            return _OptionRef(name)

        if inline is not None:
            return _OptionRef(name, inline)

        value = next(tokens, MISSING)
        if value is MISSING and not option.has_default:
            raise MissingValueForOption(name)
        return _OptionRef(name, value)

    def _resolve_value(
        self,
        name: str,
        option: OptionSpec,
        supplied: dict[str, Any],
        config_data: dict[str, Any],
    ) -> Any:
        """
        Materialize the final value of one option.

        Precedence: command line > configuration file > declared default.
        Returns MISSING for an optional option with nothing to resolve.
        """
        if option.is_switch:
            if name in supplied:
                return True
            if name in config_data:
                return config_data[name]
            return option.default if option.has_default else False

        # A reference without a value (end of input) falls back like an absent one
        raw = supplied.get(name, MISSING)
        if raw is not MISSING:
            return self._convert(name, option, raw)
        if name in config_data:
            return self._convert(name, option, config_data[name])
        if option.has_default:
            return option.default
        if option.required:
            raise MissingRequiredOption(name)
        return MISSING

    def _convert(self, name: str, option: Valued, raw: str) -> Any:
        if option.parse is None:
            return raw
        try:
            # The parser's return value is final, None included
            return option.parse(raw)
        except (TypeError, ValueError) as e:
            raise InvalidOptionValue(name, raw, str(e)) from e

    def _load_config_file(self, config_path: str) -> dict[str, Any]:
        """
        Load option values from a YAML or JSON file.

        Args:
            config_path (str): Path to the configuration file.

        Returns:
            dict[str, Any]: Option name to value.

        Raises:
            FileNotFoundError: If the config file doesn't exist.
            ValueError: If the file is invalid or names unknown options.
            TypeError: If a switch is given a non-boolean value, or a
                value-bearing option a non-string value.
        """
        data = load_data_file(config_path) or {}
        if not isinstance(data, dict):
            raise ValueError(
                f"Configuration file must contain a mapping, got {type(data).__name__}"
            )

        unknown = [key for key in data if key not in self.options]
        if unknown:
            raise ValueError(
                f"Unknown options in configuration file {config_path}: "
                f"{', '.join(map(str, unknown))}"
            )

        for name, value in data.items():
            expected = bool if self.options[name].is_switch else str
            if not isinstance(value, expected):
                raise TypeError(
                    f"Option '{name}' expects {expected.__name__}, "
                    f"got {type(value).__name__}: {value!r}"
                )

        logger.debug("Loaded %d value(s) from %s", len(data), config_path)
        return data


def make_parser(
    spec: Optional[Mapping[str, Any]] = None,
    *,
    config_flag: Optional[Union[str, list[str], tuple[str, ...]]] = None,
) -> SpecArgParser:
    """Build a reusable parser; calling it with a host argument vector parses it."""
    return SpecArgParser(spec, config_flag=config_flag)
