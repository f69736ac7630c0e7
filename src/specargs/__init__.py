"""
specargs - A declarative command-line argument parser.

This package turns a specification of named options (long and short forms,
boolean switches or value-bearing options, defaults, custom parsers and
required options) into a reusable parser that resolves an argument list into
option values and leftover positional arguments. Option values can also be
loaded from YAML or JSON configuration files.
"""

from .errors import (
    ArgumentParseError,
    DuplicateShortAlias,
    InvalidOptionValue,
    MalformedShortAlias,
    MissingClusteredArgument,
    MissingRequiredOption,
    MissingValueForOption,
    SpecArgError,
    SpecificationError,
    UnexpectedValueForSwitch,
    UnknownOption,
)
from .lookup import CompiledLookup, compile_spec
from .parser import ParseResult, SpecArgParser, make_parser
from .spec import MISSING, Switch, Valued, load_spec_file

__version__ = "1.0.0"
__all__ = [
    "SpecArgParser",
    "ParseResult",
    "make_parser",
    "Switch",
    "Valued",
    "MISSING",
    "load_spec_file",
    "CompiledLookup",
    "compile_spec",
    "SpecArgError",
    "SpecificationError",
    "MalformedShortAlias",
    "DuplicateShortAlias",
    "ArgumentParseError",
    "UnknownOption",
    "UnexpectedValueForSwitch",
    "MissingValueForOption",
    "MissingClusteredArgument",
    "MissingRequiredOption",
    "InvalidOptionValue",
]
