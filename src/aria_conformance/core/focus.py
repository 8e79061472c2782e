"""Focus-model assertions for composite widgets.

These oracles check, generically across widgets:
- roving tabindex: exactly one member of a group is externally focusable,
  and the designation moves one step per advance key, wrapping at the end
- tab order: sequential Tab presses visit the declared stops in order
- active descendant: the owner's aria-activedescendant names the selected
  option, which is the only selected option

Focus and cursor state outside the attribute API is read with small page
scripts through SessionProtocol.execute_script.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from aria_conformance.core.protocols import Key, Present, describe_value
from aria_conformance.core.wait import wait_for
from aria_conformance.services.selectors import coerce_selector
from aria_conformance.utils.exceptions import (
    AttributeMismatch,
    ElementNotFound,
    InvariantViolation,
    SequenceMismatch,
)

if TYPE_CHECKING:
    from aria_conformance.core.context import TestContext
    from aria_conformance.core.protocols import ElementHandle
    from aria_conformance.services.selectors import Selector

logger = logging.getLogger(__name__)

IS_ACTIVE_ELEMENT_SCRIPT = "([el]) => el === document.activeElement"

ACTIVE_ELEMENT_SCRIPT = "() => document.activeElement"

SELECTION_START_SCRIPT = "([el]) => el.selectionStart"

# Moves the sequential focus navigation starting point to el (or the body)
# so that the next Tab focuses the first tab stop after it.
PLACE_FOCUS_START_SCRIPT = """([el]) => {
    const target = el || document.body;
    const previous = target.getAttribute('tabindex');
    if (document.activeElement) {
        document.activeElement.blur();
    }
    target.setAttribute('tabindex', '-1');
    target.focus();
    if (previous === null) {
        target.removeAttribute('tabindex');
    } else {
        target.setAttribute('tabindex', previous);
    }
}"""

# Focusable without a tabindex unless disabled (or an input of type hidden).
FORM_CONTROL_TAGS = frozenset({"button", "input", "select", "textarea"})


async def is_focused(ctx: TestContext, element: ElementHandle) -> bool:
    """Return whether element is the document's active element."""
    return bool(await ctx.session.execute_script(IS_ACTIVE_ELEMENT_SCRIPT, element))


async def check_focus(
    ctx: TestContext, selector: str | Selector, index: int
) -> bool:
    """Return whether the index-th match of selector has DOM focus.

    Raises:
        ElementNotFound: If selector has no match at index.
    """
    sel = coerce_selector(selector)
    elements = await ctx.query_elements(sel)
    if not 0 <= index < len(elements):
        raise ElementNotFound(
            sel.describe(), f"no element at index {index} of {len(elements)}"
        )
    return await is_focused(ctx, elements[index])


async def confirm_cursor_index(
    ctx: TestContext, selector: str | Selector, cursor_index: int
) -> bool:
    """Return whether the text cursor of the first match is at cursor_index."""
    element = await ctx.find(selector)
    position = await ctx.session.execute_script(SELECTION_START_SCRIPT, element)
    return position == cursor_index


async def _is_externally_focusable(ctx: TestContext, element: ElementHandle) -> bool:
    session = ctx.session
    tag = (await session.get_tag_name(element)).lower()
    if tag in FORM_CONTROL_TAGS:
        if isinstance(await session.get_attribute(element, "disabled"), Present):
            return False
        if tag == "input":
            input_type = await session.get_attribute(element, "type")
            if isinstance(input_type, Present) and input_type.value.lower() == "hidden":
                return False
    tabindex = await session.get_attribute(element, "tabindex")
    if isinstance(tabindex, Present):
        try:
            return int(tabindex.value) >= 0
        except ValueError:
            pass  # browsers ignore an unparseable tabindex
    if tag == "a":
        return isinstance(await session.get_attribute(element, "href"), Present)
    return tag in FORM_CONTROL_TAGS


async def _single_focusable(
    ctx: TestContext,
    elements: list[ElementHandle],
    label: str,
    checkpoint: str,
) -> int:
    focusable = [
        index
        for index, element in enumerate(elements)
        if await _is_externally_focusable(ctx, element)
    ]
    if len(focusable) != 1:
        raise InvariantViolation(
            f"Exactly one element of {label} should be focusable {checkpoint}, "
            f"found {len(focusable)} (indexes {focusable})"
        )
    return focusable[0]


async def _wait_for_focus_to_leave(
    ctx: TestContext, element: ElementHandle, description: str
) -> None:
    async def moved() -> bool:
        return not await is_focused(ctx, element)

    await wait_for(moved, ctx.wait_time, description, interval_ms=ctx.poll_interval)


async def assert_roving_tabindex(
    ctx: TestContext, selector: str | Selector, advance_key: str
) -> None:
    """Assert a group keeps exactly one focusable member through a full cycle.

    The focusable member receives advance_key N times for a group of N
    members. After each key the oracle waits for focus to move, then checks
    that exactly one member is focusable, that it is the next member in
    document order (wrapping from last to first), and that it has focus.

    Args:
        ctx: Test context.
        selector: The group members, in document order.
        advance_key: Key that moves to the next member, e.g. Key.ARROW_RIGHT.

    Raises:
        ElementNotFound: If the group is empty.
        InvariantViolation: If zero or several members are focusable at a
            checkpoint, or focus is not on the focusable member.
        SequenceMismatch: If the focusable member is not the expected one.
    """
    sel = coerce_selector(selector)
    label = sel.describe()
    elements = await ctx.query_elements(sel)
    size = len(elements)

    start = await _single_focusable(ctx, elements, label, "initially")
    current = start
    for step in range(1, size + 1):
        await ctx.session.send_keys(elements[current], advance_key)
        checkpoint = f"after {step} x {advance_key!s}"
        if size > 1:
            await _wait_for_focus_to_leave(
                ctx,
                elements[current],
                f"focus to leave element {current} of {label} {checkpoint}",
            )

        observed = await _single_focusable(ctx, elements, label, checkpoint)
        expected = (start + step) % size
        if observed != expected:
            raise SequenceMismatch(
                f"Element {expected} of {label} should be focusable {checkpoint}, "
                f"but element {observed} is",
                expected_index=expected,
                observed_index=observed,
            )
        if not await is_focused(ctx, elements[observed]):
            raise InvariantViolation(
                f"Element {observed} of {label} is the focusable member "
                f"{checkpoint} but does not have focus"
            )
        current = observed

    logger.debug(f"Roving tabindex held over {size} step(s) for {label}")


async def assert_tab_order(
    ctx: TestContext,
    selectors: Sequence[str | Selector],
    start: str | Selector | None = None,
) -> None:
    """Assert Tab visits each declared stop exactly once, in order.

    Focus is first placed at the start of the document, or just before
    start when given. Tab is then pressed once per stop.

    Args:
        ctx: Test context.
        selectors: The expected tab stops in order.
        start: Optional element to tab from instead of the document start.

    Raises:
        ValueError: If selectors is empty.
        ElementNotFound: If a declared stop does not exist.
        SequenceMismatch: If focus lands anywhere but the next stop.
        WaitTimeout: If Tab does not move focus.
    """
    if not selectors:
        raise ValueError("assert_tab_order requires at least one tab stop")

    labels = [coerce_selector(s).describe() for s in selectors]
    stops = [await ctx.find(s) for s in selectors]
    origin = await ctx.find(start) if start is not None else None
    await ctx.session.execute_script(PLACE_FOCUS_START_SCRIPT, origin)

    for index, label in enumerate(labels):
        active = await ctx.session.execute_script(ACTIVE_ELEMENT_SCRIPT)
        if active is None:
            active = await ctx.session.find_element("body")
        try:
            await ctx.session.send_keys(active, Key.TAB)
            await _wait_for_focus_to_leave(
                ctx, active, f"Tab {index + 1} to move focus toward {label}"
            )
        finally:
            await ctx.session.release(active)

        observed = None
        for stop_index, stop in enumerate(stops):
            if await is_focused(ctx, stop):
                observed = stop_index
                break
        if observed == index:
            continue

        if observed is None:
            detail = "an element outside the declared tab order"
        elif observed < index:
            detail = f"stop {observed} ({labels[observed]}) again"
        else:
            detail = f"stop {observed} ({labels[observed]}), skipping ahead"
        raise SequenceMismatch(
            f"Tab {index + 1} should focus stop {index} ({label}), "
            f"but focused {detail}",
            expected_index=index,
            observed_index=observed,
        )


async def assert_aria_selected_and_activedescendant(
    ctx: TestContext,
    owner_selector: str | Selector,
    option_selector: str | Selector,
    expected_index: int,
) -> None:
    """Assert active descendant and selection agree on one option.

    Waits for the owner's aria-activedescendant to be set, then asserts it
    names the option at expected_index, that DOM focus stays on the owner,
    and that this option alone has aria-selected="true".

    Args:
        ctx: Test context.
        owner_selector: The element owning aria-activedescendant, e.g. a
            combobox input.
        option_selector: The options, in document order.
        expected_index: Index of the option that should be active.

    Raises:
        WaitTimeout: If aria-activedescendant is never set.
        ElementNotFound: If there is no option at expected_index.
        InvariantViolation: If the reference names no option, focus left
            the owner, or another option is also selected.
        SequenceMismatch: If the reference names a different option.
        AttributeMismatch: If the active option is not selected.
    """
    owner_sel = coerce_selector(owner_selector)
    option_sel = coerce_selector(option_selector)

    async def reference() -> str | None:
        owner = await ctx.find(owner_sel)
        value = await ctx.session.get_attribute(owner, "aria-activedescendant")
        if isinstance(value, Present) and value.value:
            return value.value
        return None

    active_id = await wait_for(
        reference,
        ctx.wait_time,
        f'"aria-activedescendant" on {owner_sel.describe()} to be set',
        interval_ms=ctx.poll_interval,
    )

    options = await ctx.query_elements(option_sel)
    if not 0 <= expected_index < len(options):
        raise ElementNotFound(
            option_sel.describe(),
            f"no option at index {expected_index} of {len(options)}",
        )

    option_ids = []
    for option in options:
        value = await ctx.session.get_attribute(option, "id")
        option_ids.append(value.value if isinstance(value, Present) else None)

    if active_id not in option_ids:
        raise InvariantViolation(
            f'"aria-activedescendant" on {owner_sel.describe()} references '
            f'"{active_id}", which is not an option of {option_sel.describe()}'
        )
    if option_ids[expected_index] != active_id:
        observed = option_ids.index(active_id)
        raise SequenceMismatch(
            f'"aria-activedescendant" should reference option {expected_index} '
            f'("{option_ids[expected_index]}"), but references option {observed} '
            f'("{active_id}")',
            expected_index=expected_index,
            observed_index=observed,
        )

    owner = await ctx.find(owner_sel)
    if not await is_focused(ctx, owner):
        raise InvariantViolation(
            f"DOM focus should stay on {owner_sel.describe()} while "
            '"aria-activedescendant" is set'
        )

    for index, option in enumerate(options):
        selected = await ctx.session.get_attribute(option, "aria-selected")
        is_selected = selected == Present("true")
        if index == expected_index and not is_selected:
            raise AttributeMismatch(
                f'Active option {index} should have "aria-selected" set to '
                f"'true', got {describe_value(selected)}"
            )
        if index != expected_index and is_selected:
            raise InvariantViolation(
                f'Option {index} also has "aria-selected" set to \'true\' while '
                f"option {expected_index} is active"
            )
