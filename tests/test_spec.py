"""
Tests for specification normalization and compilation.
"""

import pytest

from specargs import (
    CompiledLookup,
    DuplicateShortAlias,
    MalformedShortAlias,
    SpecArgParser,
    SpecificationError,
    Switch,
    Valued,
    compile_spec,
)
from specargs.spec import CONVERTERS, option_from_mapping, options_from_spec


class TestOptionsFromSpec:
    """Test suite for plain-data specification handling."""

    def test_empty_inputs(self):
        assert options_from_spec(None) == {}
        assert options_from_spec({}) == {}
        assert options_from_spec({"opts": {}}) == {}

    def test_mapping_becomes_variant(self):
        options = options_from_spec(
            {"opts": {"v": {"switch": True, "short": "v"}, "n": {"parse": "int"}}}
        )
        assert options["v"] == Switch(short="v")
        assert options["n"] == Valued(parse=int)

    def test_declaration_order_is_kept(self):
        options = options_from_spec({"opts": {"b": {}, "a": {}, "c": {}}})
        assert list(options) == ["b", "a", "c"]

    def test_unknown_top_level_key(self):
        with pytest.raises(SpecificationError):
            options_from_spec({"flags": {}})

    def test_unknown_option_key(self):
        with pytest.raises(SpecificationError, match="Unknown keys"):
            option_from_mapping("x", {"help": "text"})

    def test_required_with_default_rejected(self):
        with pytest.raises(SpecificationError):
            option_from_mapping("x", {"required": True, "default": 1})
        with pytest.raises(SpecificationError):
            Valued(required=True, default=1)

    def test_switch_with_parse_rejected(self):
        with pytest.raises(SpecificationError, match="parse"):
            option_from_mapping("x", {"switch": True, "parse": int})

    def test_switch_with_required_rejected(self):
        with pytest.raises(SpecificationError, match="required"):
            option_from_mapping("x", {"switch": True, "required": True})

    def test_unknown_converter_name(self):
        with pytest.raises(SpecificationError, match="Unknown parser"):
            option_from_mapping("x", {"parse": "complex"})

    def test_non_callable_parser(self):
        with pytest.raises(SpecificationError):
            option_from_mapping("x", {"parse": 3})

    @pytest.mark.parametrize("name", ["", "-x", "a=b", 3])
    def test_invalid_option_names(self, name):
        with pytest.raises(SpecificationError):
            options_from_spec({"opts": {name: {}}})

    def test_invalid_option_value(self):
        with pytest.raises(SpecificationError):
            options_from_spec({"opts": {"x": "switch"}})

    def test_strict_bool_converter(self):
        convert = CONVERTERS["bool"]
        assert convert("true") is True
        assert convert("0") is False
        with pytest.raises(ValueError):
            convert("yes")


class TestCompileSpec:
    """Test suite for the lookup compiler."""

    def test_long_and_short_forms(self):
        lookup = compile_spec({"verbose": Switch(short="v"), "name": Valued()})
        assert isinstance(lookup, CompiledLookup)
        assert lookup.resolve("--verbose") == "verbose"
        assert lookup.resolve("-v") == "verbose"
        assert lookup.resolve("--name") == "name"
        assert lookup.resolve("-n") is None
        assert len(lookup) == 3
        assert "-v" in lookup

    def test_reserved_options_resolve_but_are_hidden(self):
        lookup = compile_spec({"name": Valued()}, {"config": Valued(short="c")})
        assert lookup.resolve("--config") == "config"
        assert lookup.resolve("-c") == "config"
        assert lookup["config"] == Valued(short="c")
        assert list(lookup.options) == ["name"]

    def test_reserved_name_clash(self):
        with pytest.raises(SpecificationError, match="conflict"):
            compile_spec({"config": Valued()}, {"config": Valued()})

    def test_reserved_short_alias_clash(self):
        with pytest.raises(DuplicateShortAlias):
            compile_spec({"verbose": Switch(short="v")}, {"config": Valued(short="v")})

    def test_options_are_read_only(self):
        lookup = compile_spec({"name": Valued()})
        with pytest.raises(TypeError):
            lookup.options["other"] = Valued()  # type: ignore[index]

    def test_short_alias_too_long(self):
        with pytest.raises(MalformedShortAlias) as exc:
            compile_spec({"all": Switch(short="ab")})
        assert exc.value.alias == "ab"
        assert exc.value.option == "all"

    def test_empty_short_alias(self):
        with pytest.raises(MalformedShortAlias):
            compile_spec({"all": Switch(short="")})

    def test_dash_short_alias(self):
        with pytest.raises(MalformedShortAlias):
            compile_spec({"all": Switch(short="-")})

    def test_duplicate_short_alias(self):
        with pytest.raises(DuplicateShortAlias) as exc:
            compile_spec({"verbose": Switch(short="v"), "version": Switch(short="v")})
        assert exc.value.option == "version"
        assert exc.value.other == "verbose"

    def test_malformed_alias_fails_at_construction(self):
        """Test that alias errors happen before any parse call."""
        with pytest.raises(MalformedShortAlias):
            SpecArgParser({"opts": {"x": {"short": "ab"}}})

    def test_specification_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            SpecArgParser({"opts": {"x": {"short": "ab"}}})
