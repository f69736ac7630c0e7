"""
Compile option specifications into a token lookup table.
"""

import logging
from types import MappingProxyType
from typing import Iterator, Mapping, Optional

from .errors import DuplicateShortAlias, MalformedShortAlias, SpecificationError
from .spec import OptionSpec

logger = logging.getLogger(__name__)


class CompiledLookup:
    """
    Read-only mapping from token forms (``--name``, ``-s``) to option names.

    Built once per specification by ``compile_spec`` and safe to share between
    any number of parse calls.
    """

    def __init__(
        self,
        options: Mapping[str, OptionSpec],
        forms: Mapping[str, str],
        reserved: Optional[Mapping[str, OptionSpec]] = None,
    ) -> None:
        self._options = MappingProxyType(dict(options))
        # Resolvable, but not part of the declared options
        self._reserved = MappingProxyType(dict(reserved or {}))
        self._forms = MappingProxyType(dict(forms))

    @property
    def options(self) -> Mapping[str, OptionSpec]:
        """Declared options by canonical name, in declaration order."""
        return self._options

    def resolve(self, form: str) -> Optional[str]:
        """Return the canonical name for ``--name`` or ``-s``, or None if unknown."""
        return self._forms.get(form)

    def __getitem__(self, name: str) -> OptionSpec:
        if name in self._reserved:
            return self._reserved[name]
        return self._options[name]

    def __contains__(self, form: object) -> bool:
        return form in self._forms

    def __iter__(self) -> Iterator[str]:
        return iter(self._forms)

    def __len__(self) -> int:
        return len(self._forms)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({sorted(self._forms)!r})"


def compile_spec(
    options: Mapping[str, OptionSpec],
    reserved: Optional[Mapping[str, OptionSpec]] = None,
) -> CompiledLookup:
    """
    Build the lookup table for a set of options.

    Args:
        options: Canonical option name to option spec.
        reserved: Options owned by the parser itself (the configuration file
            flag). They resolve like declared options but are not listed in
            ``CompiledLookup.options``.

    Returns:
        CompiledLookup: Lookup resolving every long form and short alias.

    Raises:
        MalformedShortAlias: If a short alias is not exactly one character.
        DuplicateShortAlias: If two options declare the same short alias.
        SpecificationError: If a reserved name is also declared.
    """
    reserved = reserved or {}
    clash = [name for name in reserved if name in options]
    if clash:
        raise SpecificationError(f"Flag name conflict: --{clash[0]}")

    forms: dict[str, str] = {}

    for name, option in [*options.items(), *reserved.items()]:
        long_form = f"--{name}"
        forms[long_form] = name

        short = option.short
        if short is None:
            continue
        if not isinstance(short, str) or len(short) != 1:
            raise MalformedShortAlias(str(short), name)
        if short in "-=":
            raise MalformedShortAlias(short, name)

        short_form = f"-{short}"
        if short_form in forms:
            raise DuplicateShortAlias(short, name, forms[short_form])
        forms[short_form] = name

    logger.debug(
        "Compiled %d option(s) into %d token form(s)", len(options), len(forms)
    )
    return CompiledLookup(options, forms, reserved)
