#!/usr/bin/env python3
"""
Tests for default values, switch fallbacks and required options.

Every declared option ends up in the result, except optional value-bearing
options that were never supplied and have no default.
"""

import pytest

from specargs import MISSING, MissingRequiredOption, SpecArgParser, Switch, Valued


class TestSwitchDefaults:
    """Test suite for switch resolution."""

    def test_switch_defaults_to_false(self):
        result = SpecArgParser({"opts": {"yes": {"switch": True}}}).parse([])
        assert result.opts == {"yes": False}

    def test_switch_declared_default(self):
        parser = SpecArgParser({"opts": {"color": {"switch": True, "default": True}}})
        assert parser.parse([]).opts["color"] is True

    def test_switch_present_is_true(self):
        parser = SpecArgParser({"opts": {"yes": {"switch": True, "default": False}}})
        assert parser.parse(["--yes"]).opts["yes"] is True

    def test_switch_repeated(self):
        parser = SpecArgParser({"opts": {"yes": Switch()}})
        assert parser.parse(["--yes", "--yes"]).opts["yes"] is True


class TestValueDefaults:
    """Test suite for value-bearing option defaults."""

    def test_default_value_for_missing_option(self):
        parser = SpecArgParser({"opts": {"option": {"default": 1, "parse": float}}})
        assert parser.parse([]).opts["option"] == 1

    def test_default_is_not_parsed(self):
        """Test that defaults are used as declared, not passed to the parser."""
        parser = SpecArgParser({"opts": {"option": {"default": "7", "parse": int}}})
        assert parser.parse([]).opts["option"] == "7"

    def test_none_is_a_valid_default(self):
        parser = SpecArgParser({"opts": {"option": Valued(default=None)}})
        result = parser.parse([])
        assert "option" in result.opts
        assert result.opts["option"] is None

    def test_optional_option_without_default_is_absent(self):
        result = SpecArgParser({"opts": {"option": {}}}).parse([])
        assert "option" not in result.opts

    def test_has_default_uses_sentinel(self):
        assert not Valued().has_default
        assert Valued(default=None).has_default
        assert Valued().default is MISSING
        assert Switch().default is MISSING
        assert repr(MISSING) == "MISSING"

    def test_option_variants_keep_field_order(self):
        """Test that both variants accept short and default positionally."""
        assert Switch("s", True) == Switch(short="s", default=True)
        assert Valued("v", "x").default == "x"


class TestRequiredOptions:
    """Test suite for required options."""

    def test_missing_required_option_raises(self):
        parser = SpecArgParser({"opts": {"yes": {"required": True}}})
        with pytest.raises(MissingRequiredOption) as exc:
            parser.parse([])
        assert exc.value.option == "yes"
        assert "yes" in str(exc.value)

    def test_required_option_names_only_the_missing_one(self):
        parser = SpecArgParser(
            {"opts": {"first": {"required": True}, "second": {"required": True}}}
        )
        with pytest.raises(MissingRequiredOption) as exc:
            parser.parse(["--first", "1"])
        assert exc.value.option == "second"

    def test_supplied_required_option(self):
        parser = SpecArgParser({"opts": {"name": {"required": True}}})
        assert parser.parse(["--name=x"]).opts == {"name": "x"}

    def test_required_option_with_none_parse_result(self):
        parser = SpecArgParser(
            {"opts": {"name": {"required": True, "parse": lambda s: None}}}
        )
        assert parser.parse(["--name", "x"]).opts == {"name": None}

    def test_no_partial_result_on_error(self):
        """Test that an error aborts the whole parse."""
        parser = SpecArgParser({"opts": {"a": {"switch": True}, "b": {"required": True}}})
        with pytest.raises(MissingRequiredOption):
            parser.parse(["--a", "pos"])
