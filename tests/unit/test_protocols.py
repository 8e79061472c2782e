"""Unit tests for core protocols and data types.

Tests cover:
- Present/ABSENT attribute values
- Key constants
- CaseResult status and diagnostics
- Runtime structure of the session protocol
"""

import pytest

from aria_conformance.core.protocols import (
    ABSENT,
    BehaviorRecord,
    CaseResult,
    Key,
    NamedKey,
    Outcome,
    Present,
    SessionProtocol,
    describe_value,
)

BEHAVIOR = BehaviorRecord(
    "content/patterns/radio/examples/radio-rating.html",
    "radio-role",
    "Identifies each g element as a radio button.",
)


class TestAttributeValue:
    """Tests for Present and ABSENT."""

    def test_present_empty_is_not_absent(self) -> None:
        assert Present("") != ABSENT
        assert Present("") == Present("")

    def test_present_values_compare_by_value(self) -> None:
        assert Present("true") == Present("true")
        assert Present("true") != Present("false")

    def test_present_is_immutable(self) -> None:
        value = Present("x")
        with pytest.raises(AttributeError):
            value.value = "y"  # type: ignore[misc]

    def test_describe_value(self) -> None:
        assert describe_value(Present("")) == "''"
        assert describe_value(Present("true")) == "'true'"
        assert describe_value(ABSENT) == "<absent>"

    def test_absent_repr(self) -> None:
        assert repr(ABSENT) == "ABSENT"


class TestKeys:
    """Tests for Key constants."""

    def test_named_keys_are_strings(self) -> None:
        assert isinstance(Key.ARROW_DOWN, NamedKey)
        assert Key.ARROW_DOWN == "ArrowDown"

    def test_plain_text_is_not_named(self) -> None:
        assert not isinstance("Tab", NamedKey)

    def test_modifiers(self) -> None:
        assert Key.ALT in Key.MODIFIERS
        assert Key.SHIFT in Key.MODIFIERS
        assert Key.TAB not in Key.MODIFIERS


class TestCaseResult:
    """Tests for CaseResult."""

    def test_passed(self) -> None:
        assert CaseResult("d", BEHAVIOR, Outcome.PASS).passed is True
        assert CaseResult("d", BEHAVIOR, Outcome.FAIL).passed is False
        assert CaseResult("d", BEHAVIOR, Outcome.ERROR).passed is False

    def test_pass_diagnostic_has_no_message_line(self) -> None:
        result = CaseResult("roles", BEHAVIOR, Outcome.PASS)
        lines = result.diagnostic().splitlines()
        assert lines[0] == (
            "[PASS] content/patterns/radio/examples/radio-rating.html "
            "(radio-role): roles"
        )
        assert lines[1] == (
            "  Specification: Identifies each g element as a radio button."
        )
        assert len(lines) == 2

    def test_fail_diagnostic_includes_message(self) -> None:
        result = CaseResult("roles", BEHAVIOR, Outcome.FAIL, "found 6")
        assert result.diagnostic().splitlines()[-1] == "  found 6"


class TestSessionProtocol:
    """Tests for the structure of SessionProtocol."""

    @pytest.mark.parametrize(
        "method",
        [
            "find_element",
            "find_elements",
            "get_attribute",
            "get_property",
            "get_tag_name",
            "get_text",
            "is_displayed",
            "send_keys",
            "execute_script",
            "release",
        ],
    )
    def test_declares_method(self, method: str) -> None:
        assert callable(getattr(SessionProtocol, method))
