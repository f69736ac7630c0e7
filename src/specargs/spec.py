"""
Option specification model.

An option is either a ``Switch`` (a boolean flag that takes no value) or a
``Valued`` option (takes a string value, optionally converted by a ``parse``
function). Specifications may be written with these classes directly or as
plain data, e.g.::

    {
        "opts": {
            "verbose": {"switch": True, "short": "v"},
            "count": {"parse": int, "default": 1},
            "name": {"required": True},
        }
    }

Plain-data specifications can also be loaded from JSON or YAML files, in which
case ``parse`` is given by converter name ("str", "int", "float", "bool").
"""

import dataclasses
import json
import logging
import os
import typing
from typing import Any, Callable, Mapping, Optional, Union

from .errors import SpecificationError

try:
    import yaml

    HAS_YAML = True
except ImportError:
    HAS_YAML = False

logger = logging.getLogger(__name__)

class _Missing:
    """Marker for "no default declared"; ``None`` is a legitimate default."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


@dataclasses.dataclass(frozen=True)
class Switch:
    """A boolean option: ``True`` when present, otherwise its default or ``False``."""

    short: Optional[str] = None
    default: Any = MISSING

    @property
    def is_switch(self) -> bool:
        return True

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING


@dataclasses.dataclass(frozen=True)
class Valued:
    """
    An option carrying a string value.

    Attributes:
        short: Optional one-character alias.
        default: Value used when the option is never referenced.
        parse: Converter applied to the raw string value.
        required: Fail when the option is never supplied. Cannot be combined
            with ``default``.
    """

    short: Optional[str] = None
    default: Any = MISSING
    parse: Optional[Callable[[str], Any]] = None
    required: bool = False

    def __post_init__(self) -> None:
        if self.required and self.default is not MISSING:
            raise SpecificationError(
                "A required option cannot also declare a default value"
            )
        if self.parse is not None and not callable(self.parse):
            raise SpecificationError(
                f"Option parser must be callable, got {type(self.parse).__name__}"
            )

    @property
    def is_switch(self) -> bool:
        return False

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING


OptionSpec = Union[Switch, Valued]


_TRUE_WORDS = frozenset({"True", "true", "1"})
_FALSE_WORDS = frozenset({"False", "false", "0"})


def _strict_bool(value: str) -> bool:
    if value in _TRUE_WORDS:
        return True
    if value in _FALSE_WORDS:
        return False
    raise ValueError(f"expected one of true/false/1/0, got {value!r}")


CONVERTERS: dict[str, Callable[[str], Any]] = {
    "str": str,
    "int": int,
    "float": float,
    "bool": _strict_bool,
}

_OPTION_KEYS = frozenset({"switch", "short", "default", "parse", "required"})


def _resolve_converter(name: str, parse: Any) -> Optional[Callable[[str], Any]]:
    if parse is None or callable(parse):
        return parse
    if isinstance(parse, str):
        try:
            return CONVERTERS[parse]
        except KeyError:
            raise SpecificationError(
                f"Unknown parser '{parse}' for option '{name}'. "
                f"Known parsers are: {', '.join(CONVERTERS)}"
            ) from None
    raise SpecificationError(
        f"Parser for option '{name}' must be callable or one of: {', '.join(CONVERTERS)}"
    )


def option_from_mapping(name: str, mapping: Mapping[str, Any]) -> OptionSpec:
    """
    Build an option from its plain-data description.

    Args:
        name: Canonical option name, used in error messages.
        mapping: Keys among ``switch``, ``short``, ``default``, ``parse``
            and ``required``.

    Returns:
        OptionSpec: A ``Switch`` or ``Valued`` instance.

    Raises:
        SpecificationError: On unknown keys or contradictory settings.
    """
    unknown = set(mapping) - _OPTION_KEYS
    if unknown:
        raise SpecificationError(
            f"Unknown keys for option '{name}': {', '.join(sorted(unknown))}"
        )

    short = mapping.get("short")
    default = mapping.get("default", MISSING)

    if mapping.get("switch", False):
        for key in ("parse", "required"):
            if key in mapping:
                raise SpecificationError(
                    f"Switch '{name}' does not support '{key}'"
                )
        return Switch(short=short, default=default)

    return Valued(
        short=short,
        default=default,
        parse=_resolve_converter(name, mapping.get("parse")),
        required=bool(mapping.get("required", False)),
    )


def _check_name(name: Any) -> None:
    if not isinstance(name, str) or not name:
        raise SpecificationError(f"Option names must be non-empty strings: {name!r}")
    if name.startswith("-") or "=" in name:
        raise SpecificationError(
            f"Option name '{name}' must not start with '-' or contain '='"
        )


def options_from_spec(
    spec: Optional[Mapping[str, Any]],
) -> dict[str, OptionSpec]:
    """
    Normalize a specification into an ordered ``name -> OptionSpec`` mapping.

    Args:
        spec: ``None``, an empty mapping, or ``{"opts": {name: option, ...}}``
            where each option is a ``Switch``, a ``Valued`` or a mapping.

    Returns:
        dict[str, OptionSpec]: Options in declaration order.

    Raises:
        SpecificationError: If the specification is malformed.
    """
    if not spec:
        return {}
    if not isinstance(spec, Mapping):
        raise SpecificationError(
            f"Specification must be a mapping, got {type(spec).__name__}"
        )

    extra = set(spec) - {"opts"}
    if extra:
        raise SpecificationError(
            f"Unknown specification keys: {', '.join(sorted(map(str, extra)))}"
        )

    declared = spec.get("opts") or {}
    if not isinstance(declared, Mapping):
        raise SpecificationError("'opts' must map option names to option specs")

    options: dict[str, OptionSpec] = {}
    for name, option in declared.items():
        _check_name(name)
        if isinstance(option, (Switch, Valued)):
            options[name] = option
        elif isinstance(option, Mapping):
            options[name] = option_from_mapping(name, option)
        else:
            raise SpecificationError(
                f"Option '{name}' must be a Switch, Valued or mapping, "
                f"got {type(option).__name__}"
            )
    logger.debug("Normalized specification with %d option(s)", len(options))
    return options


def _decode_yaml(stream: typing.TextIO) -> Any:
    if not HAS_YAML:
        raise ValueError("Reading YAML files requires PyYAML: pip install PyYAML")
    try:
        return yaml.safe_load(stream)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML file: {e}") from e


def _decode_json(stream: typing.TextIO) -> Any:
    try:
        return json.load(stream)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON file: {e}") from e


_DECODERS: dict[str, Callable[[typing.TextIO], Any]] = {
    ".yaml": _decode_yaml,
    ".yml": _decode_yaml,
    ".json": _decode_json,
}


def load_data_file(path: str) -> Any:
    """
    Decode a YAML or JSON document, choosing the format by file extension.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: On an unsupported extension or a malformed document.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"File not found: {path}")

    extension = os.path.splitext(path)[1].lower()
    decoder = _DECODERS.get(extension)
    if decoder is None:
        raise ValueError(
            f"Unsupported file format: {extension or '(none)'}. "
            f"Supported formats are: {', '.join(_DECODERS)}"
        )
    with open(path, "r") as stream:
        return decoder(stream)


def load_spec_file(path: str) -> dict[str, Any]:
    """Load a plain-data specification from a YAML or JSON file."""
    data = load_data_file(path)
    logger.debug("Loaded specification file %s", path)
    return {"opts": options_from_spec(typing.cast(Optional[Mapping[str, Any]], data))}
