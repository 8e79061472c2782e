"""Editable combobox with list autocomplete and inline completion.

Typing filters the US states listed in the popup and completes the first
match inline. Arrow keys move the active descendant through the options
while DOM focus stays on the textbox.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from aria_conformance.core.assertions import (
    assert_aria_label_exists,
    assert_attribute_dne,
    assert_attribute_values,
)
from aria_conformance.core.focus import (
    assert_aria_selected_and_activedescendant,
    confirm_cursor_index,
)
from aria_conformance.core.protocols import Key, Present, describe_value
from aria_conformance.core.roles import assert_aria_roles
from aria_conformance.core.wait import wait_for_attribute_change
from aria_conformance.suites.base import WidgetSuite
from aria_conformance.utils.exceptions import (
    AttributeMismatch,
    CountMismatch,
    ElementNotFound,
    InvariantViolation,
    SequenceMismatch,
)

if TYPE_CHECKING:
    from aria_conformance.core.context import TestContext
    from aria_conformance.core.registry import TestRegistry

EXAMPLE_REF = "content/patterns/combobox/examples/combobox-autocomplete-both.html"

TEXTBOX = '#ex1 input[type="text"]'
LISTBOX = '#ex1 [role="listbox"]'
OPTIONS = '#ex1 [role="option"]'
BUTTON = "#ex1 button"

ALL_OPTIONS = 56
A_OPTIONS = 5
SECOND_A_OPTION = "Alaska"

suite = WidgetSuite(EXAMPLE_REF)


def build(registry: TestRegistry) -> None:
    suite.build(registry)


async def _type(ctx: TestContext, *keys: str) -> None:
    await ctx.session.send_keys(await ctx.find(TEXTBOX), *keys)


async def _textbox_value(ctx: TestContext) -> str:
    return await ctx.session.get_property(await ctx.find(TEXTBOX), "value")


async def _assert_textbox_value(ctx: TestContext, expected: str, action: str) -> None:
    value = await _textbox_value(ctx)
    if value != expected:
        raise AttributeMismatch(
            f"Textbox value should be {expected!r} {action}, got {value!r}"
        )


async def _assert_displayed(
    ctx: TestContext, selector: str, expected: bool, action: str
) -> None:
    displayed = await ctx.session.is_displayed(await ctx.find(selector))
    if displayed != expected:
        state = "displayed" if expected else "hidden"
        raise AttributeMismatch(f"{selector} should be {state} {action}")


async def _assert_option_count(ctx: TestContext, expected: int, action: str) -> None:
    options = await ctx.query_elements(OPTIONS, allow_empty=True)
    if len(options) != expected:
        raise CountMismatch(
            f"{expected} options should be listed {action}, found {len(options)}"
        )


async def _assert_no_option_selected(ctx: TestContext, action: str) -> None:
    options = await ctx.query_elements(OPTIONS, allow_empty=True)
    selected = [
        index
        for index, option in enumerate(options)
        if await ctx.session.get_attribute(option, "aria-selected") == Present("true")
    ]
    if selected:
        raise InvariantViolation(
            f"No option should be selected {action}, found selected "
            f"options at indexes {selected}"
        )


async def _option_text(ctx: TestContext, index: int) -> str:
    options = await ctx.query_elements(OPTIONS)
    if index >= len(options):
        raise ElementNotFound(OPTIONS, f"no option at index {index} of {len(options)}")
    return await ctx.session.get_text(options[index])


async def _assert_textbox_has_visual_focus(ctx: TestContext, action: str) -> None:
    textbox = await ctx.find(TEXTBOX)
    active = await ctx.session.get_attribute(textbox, "aria-activedescendant")
    if active != Present(""):
        raise AttributeMismatch(
            f"Visual focus should be on the textbox {action}, "
            f'but "aria-activedescendant" is {describe_value(active)}'
        )


async def _assert_cursor_at(ctx: TestContext, index: int, action: str) -> None:
    if not await confirm_cursor_index(ctx, TEXTBOX, index):
        raise SequenceMismatch(
            f"Cursor should be at index {index} {action}",
            expected_index=index,
            observed_index=None,
        )


async def _assert_controls_popup(ctx: TestContext, selector: str) -> None:
    owner = await ctx.find(selector)
    popup_id = await ctx.session.get_attribute(owner, "aria-controls")
    if not isinstance(popup_id, Present) or not popup_id.value:
        raise AttributeMismatch(
            f'"aria-controls" should exist on {selector}, '
            f"got {describe_value(popup_id)}"
        )
    popups = await ctx.query_elements(f'#ex1 [id="{popup_id.value}"]', allow_empty=True)
    if len(popups) != 1:
        raise CountMismatch(
            f'One element should have id "{popup_id.value}" as referenced by '
            f'"aria-controls" on {selector}, found {len(popups)}'
        )


async def _assert_expands_on_typing(ctx: TestContext, selector: str) -> None:
    await assert_attribute_values(ctx, selector, "aria-expanded", "false")
    await _assert_displayed(ctx, LISTBOX, False, 'while "aria-expanded" is false')

    await _type(ctx, "a")

    await assert_attribute_values(ctx, selector, "aria-expanded", "true")
    await _assert_displayed(ctx, LISTBOX, True, 'while "aria-expanded" is true')


# Attributes


@suite.case('Test for role="combobox"', "combobox-role")
async def combobox_role(ctx: TestContext) -> None:
    await assert_aria_roles(ctx, "ex1", "combobox", "1", "input")


@suite.case('"aria-autocomplete" on combobox element', "combobox-aria-autocomplete")
async def combobox_aria_autocomplete(ctx: TestContext) -> None:
    await assert_attribute_values(ctx, TEXTBOX, "aria-autocomplete", "both")


@suite.case('"aria-controls" attribute on combobox element', "combobox-aria-controls")
async def combobox_aria_controls(ctx: TestContext) -> None:
    await _assert_controls_popup(ctx, TEXTBOX)


@suite.case('"aria-expanded" on combobox element', "combobox-aria-expanded")
async def combobox_aria_expanded(ctx: TestContext) -> None:
    await _assert_expands_on_typing(ctx, TEXTBOX)


@suite.case(
    '"aria-activedescendant" on combobox element', "combobox-aria-activedescendant"
)
async def combobox_aria_activedescendant(ctx: TestContext) -> None:
    await assert_attribute_values(ctx, TEXTBOX, "aria-activedescendant", None)


@suite.case('"id" attribute on combobox element', "combobox-id")
async def combobox_id(ctx: TestContext) -> None:
    combobox_id = await ctx.session.get_attribute(await ctx.find(TEXTBOX), "id")
    if not isinstance(combobox_id, Present) or not combobox_id.value:
        raise AttributeMismatch('"id" attribute should exist on the combobox')
    labels = await ctx.query_elements(f'[for="{combobox_id.value}"]', allow_empty=True)
    if len(labels) != 1:
        raise CountMismatch(
            f'One element should label the combobox with [for="{combobox_id.value}"], '
            f"found {len(labels)}"
        )


@suite.case('role "listbox" on ul element', "listbox-role")
async def listbox_role(ctx: TestContext) -> None:
    await assert_aria_roles(ctx, "ex1", "listbox", "1", "ul")


@suite.case('"aria-label" attribute on listbox element', "listbox-aria-label")
async def listbox_aria_label(ctx: TestContext) -> None:
    await assert_aria_label_exists(ctx, LISTBOX)


@suite.case('role "option" on li elements', "option-role")
async def option_role(ctx: TestContext) -> None:
    # ARROW_DOWN on an empty textbox lists every option
    await _type(ctx, Key.ARROW_DOWN)
    await assert_aria_roles(ctx, "ex1", "option", ALL_OPTIONS, "li")


@suite.case('"aria-selected" attribute on options element', "option-aria-selected")
async def option_aria_selected(ctx: TestContext) -> None:
    await _type(ctx, "a")
    await assert_attribute_values(
        ctx, f"{OPTIONS}:nth-of-type(1)", "aria-selected", "true"
    )


@suite.case('Button should have tabindex="-1"', "button-tabindex")
async def button_tabindex(ctx: TestContext) -> None:
    await assert_attribute_values(ctx, BUTTON, "tabindex", "-1")


@suite.case('"aria-label" attribute on button element', "button-aria-label")
async def button_aria_label(ctx: TestContext) -> None:
    await assert_aria_label_exists(ctx, BUTTON)


@suite.case('"aria-controls" attribute on button element', "button-aria-controls")
async def button_aria_controls(ctx: TestContext) -> None:
    await _assert_controls_popup(ctx, BUTTON)


@suite.case('"aria-expanded" on button element', "button-aria-expanded")
async def button_aria_expanded(ctx: TestContext) -> None:
    await _assert_expands_on_typing(ctx, BUTTON)


# Keys


@suite.case(
    "Test alt + down key press with focus on textbox", "textbox-key-alt-down-arrow"
)
async def textbox_key_alt_down_arrow(ctx: TestContext) -> None:
    await _type(ctx, Key.ALT, Key.ARROW_DOWN)
    await _assert_displayed(ctx, LISTBOX, True, "after ALT + ARROW_DOWN")
    await assert_attribute_dne(ctx, OPTIONS, "aria-selected")


@suite.case("Test down key press with focus on textbox", "textbox-key-down-arrow")
async def textbox_key_down_arrow(ctx: TestContext) -> None:
    await _type(ctx, Key.ARROW_DOWN)
    await _assert_displayed(ctx, LISTBOX, True, "after ARROW_DOWN")
    await wait_for_attribute_change(ctx, TEXTBOX, "aria-activedescendant", "")
    await assert_aria_selected_and_activedescendant(ctx, TEXTBOX, OPTIONS, 0)


@suite.case("Test down key press with focus on list", "listbox-key-down-arrow")
async def listbox_key_down_arrow(ctx: TestContext) -> None:
    await _type(ctx, "a", Key.ARROW_DOWN)

    for step in range(2, A_OPTIONS + 1):
        textbox = await ctx.find(TEXTBOX)
        previous = await ctx.session.get_attribute(textbox, "aria-activedescendant")
        await ctx.session.send_keys(textbox, Key.ARROW_DOWN)
        await wait_for_attribute_change(ctx, TEXTBOX, "aria-activedescendant", previous)
        await assert_aria_selected_and_activedescendant(
            ctx, TEXTBOX, OPTIONS, step % A_OPTIONS
        )


@suite.case("Test up key press with focus on textbox", "textbox-key-up-arrow")
async def textbox_key_up_arrow(ctx: TestContext) -> None:
    await _type(ctx, Key.ARROW_UP)
    await _assert_displayed(ctx, LISTBOX, True, "after ARROW_UP")
    await wait_for_attribute_change(ctx, TEXTBOX, "aria-activedescendant", "")

    options = await ctx.query_elements(OPTIONS)
    await assert_aria_selected_and_activedescendant(
        ctx, TEXTBOX, OPTIONS, len(options) - 1
    )


@suite.case("Test up key press with focus on listbox", "listbox-key-up-arrow")
async def listbox_key_up_arrow(ctx: TestContext) -> None:
    # ARROW_UP after typing moves to the last matching option
    await _type(ctx, "a", Key.ARROW_UP)
    await wait_for_attribute_change(ctx, TEXTBOX, "aria-activedescendant", "")
    await assert_aria_selected_and_activedescendant(
        ctx, TEXTBOX, OPTIONS, A_OPTIONS - 1
    )

    for index in range(A_OPTIONS - 2, 0, -1):
        textbox = await ctx.find(TEXTBOX)
        previous = await ctx.session.get_attribute(textbox, "aria-activedescendant")
        await ctx.session.send_keys(textbox, Key.ARROW_UP)
        await wait_for_attribute_change(ctx, TEXTBOX, "aria-activedescendant", previous)
        await assert_aria_selected_and_activedescendant(ctx, TEXTBOX, OPTIONS, index)


@suite.case("Test enter key press with focus on textbox", "textbox-key-enter")
async def textbox_key_enter(ctx: TestContext) -> None:
    await _type(ctx, "a")
    first_option = await _option_text(ctx, 0)

    await _type(ctx, Key.ENTER)

    await assert_attribute_values(ctx, TEXTBOX, "aria-expanded", "false")
    await _assert_textbox_value(ctx, first_option, "after ENTER")


@suite.case("Test backspace with focus on textbox", "standard-single-line-editing-keys")
async def backspace_clears_completion(ctx: TestContext) -> None:
    await _type(ctx, "a")
    first_option = await _option_text(ctx, 0)
    await _assert_textbox_value(ctx, first_option, 'after typing "a"')

    # The first BACK_SPACE removes the inline completion only
    await _type(ctx, Key.BACK_SPACE)
    await assert_attribute_values(ctx, TEXTBOX, "aria-expanded", "true")
    await _assert_textbox_value(ctx, "A", "after one BACK_SPACE")

    await _type(ctx, Key.BACK_SPACE)
    await assert_attribute_values(ctx, TEXTBOX, "aria-expanded", "true")
    await _assert_textbox_value(ctx, "", "after two BACK_SPACE")
    await _assert_no_option_selected(ctx, "after two BACK_SPACE")

    await _type(ctx, Key.ARROW_DOWN)
    await assert_attribute_values(ctx, TEXTBOX, "aria-expanded", "true")
    await assert_aria_selected_and_activedescendant(ctx, TEXTBOX, OPTIONS, 0)
    await _assert_textbox_value(ctx, first_option, "after ARROW_DOWN")
    await _assert_option_count(ctx, ALL_OPTIONS, "after ARROW_DOWN")


@suite.case(
    "Test backspace with focus on textbox (2)", "standard-single-line-editing-keys"
)
async def backspace_refilters_options(ctx: TestContext) -> None:
    await _type(ctx, "n", "o")
    await _assert_textbox_value(ctx, "North Carolina", 'after typing "n", "o"')

    await _type(ctx, Key.BACK_SPACE)
    await assert_attribute_values(ctx, TEXTBOX, "aria-expanded", "true")
    await _assert_textbox_value(ctx, "No", "after one BACK_SPACE")

    await _type(ctx, Key.BACK_SPACE)
    await assert_attribute_values(ctx, TEXTBOX, "aria-expanded", "true")
    await _assert_textbox_value(ctx, "N", "after two BACK_SPACE")
    await _assert_no_option_selected(ctx, "after two BACK_SPACE")

    await _type(ctx, Key.ARROW_DOWN)
    await assert_attribute_values(ctx, TEXTBOX, "aria-expanded", "true")
    await _assert_textbox_value(ctx, "Nebraska", "after ARROW_DOWN")
    await _assert_option_count(ctx, 9, "after ARROW_DOWN")
    await assert_aria_selected_and_activedescendant(ctx, TEXTBOX, OPTIONS, 0)


@suite.case("Test enter key press with focus on listbox", "listbox-key-enter")
async def listbox_key_enter(ctx: TestContext) -> None:
    await _type(ctx, "a", Key.ARROW_DOWN)
    second_option = await _option_text(ctx, 1)

    await _type(ctx, Key.ENTER)

    await assert_attribute_values(ctx, TEXTBOX, "aria-expanded", "false")
    await _assert_textbox_value(ctx, second_option, "after ENTER on the listbox")


@suite.case("Test single escape key press with focus on textbox", "textbox-key-escape")
async def textbox_key_escape(ctx: TestContext) -> None:
    await _type(ctx, "a", Key.ESCAPE)
    await assert_attribute_values(ctx, TEXTBOX, "aria-expanded", "false")
    await _assert_textbox_value(ctx, "Alabama", "after one ESCAPE")


@suite.case("Test double escape key press with focus on textbox", "textbox-key-escape")
async def textbox_key_double_escape(ctx: TestContext) -> None:
    await _type(ctx, "a", Key.ESCAPE, Key.ESCAPE)
    await assert_attribute_values(ctx, TEXTBOX, "aria-expanded", "false")
    await _assert_textbox_value(ctx, "", "after two ESCAPE")


@suite.case("Test escape key press with focus on listbox", "listbox-key-escape")
async def listbox_key_escape(ctx: TestContext) -> None:
    await _type(ctx, "a", Key.ARROW_DOWN, Key.ESCAPE)
    await assert_attribute_values(ctx, TEXTBOX, "aria-expanded", "false")
    await _assert_textbox_value(ctx, SECOND_A_OPTION, "after ESCAPE on the listbox")


@suite.case(
    "left arrow from focus on list puts focus on listbox and moves cursor right",
    "listbox-key-left-arrow",
)
async def listbox_key_left_arrow(ctx: TestContext) -> None:
    await _type(ctx, "a", Key.ARROW_DOWN)
    await _type(ctx, Key.ARROW_LEFT)
    await _assert_cursor_at(ctx, len(SECOND_A_OPTION) - 1, "after one ARROW_LEFT")
    await _assert_textbox_has_visual_focus(ctx, "after ARROW_LEFT")


@suite.case(
    "Right arrow from focus on list puts focus on listbox", "listbox-key-right-arrow"
)
async def listbox_key_right_arrow(ctx: TestContext) -> None:
    await _type(ctx, "a", Key.ARROW_DOWN)
    await _type(ctx, Key.ARROW_RIGHT)
    await _assert_cursor_at(ctx, len(SECOND_A_OPTION), "after one ARROW_RIGHT")
    await _assert_textbox_has_visual_focus(ctx, "after ARROW_RIGHT")


@suite.case(
    "Home from focus on list puts focus on listbox and moves cursor",
    "listbox-key-home",
)
async def listbox_key_home(ctx: TestContext) -> None:
    await _type(ctx, "a", Key.ARROW_DOWN)
    await _type(ctx, Key.HOME)
    await _assert_cursor_at(ctx, 0, "after one HOME")
    await _assert_textbox_has_visual_focus(ctx, "after HOME")


@suite.case("End from focus on list puts focus on listbox", "listbox-key-end")
async def listbox_key_end(ctx: TestContext) -> None:
    await _type(ctx, "a", Key.ARROW_DOWN)
    await _type(ctx, Key.END)
    await _assert_cursor_at(ctx, len(SECOND_A_OPTION), "after one END")
    await _assert_textbox_has_visual_focus(ctx, "after END")


@suite.case(
    "Sending character keys while focus is on listbox moves focus",
    "listbox-characters",
)
async def listbox_characters(ctx: TestContext) -> None:
    await _type(ctx, Key.ARROW_DOWN)
    await _type(ctx, "a")

    first_option = await _option_text(ctx, 0)
    await _assert_textbox_value(
        ctx, first_option + "a", 'after typing "a" with focus on the listbox'
    )
    await _assert_textbox_has_visual_focus(ctx, 'after typing "a"')


@suite.case(
    "Expected behavior for all other standard single line editing keys",
    "standard-single-line-editing-keys",
)
async def typing_filters_options(ctx: TestContext) -> None:
    await _type(ctx, "a")
    await _assert_option_count(ctx, A_OPTIONS, 'after typing "a"')
