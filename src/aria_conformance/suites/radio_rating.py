"""Rating radio group: an SVG star rating built from g[role="radio"] elements."""

from __future__ import annotations

from typing import TYPE_CHECKING

from aria_conformance.core.assertions import (
    assert_aria_label_exists,
    assert_aria_labelledby,
    assert_attribute_values,
)
from aria_conformance.core.focus import (
    assert_roving_tabindex,
    assert_tab_order,
    check_focus,
)
from aria_conformance.core.protocols import Key, Present, describe_value
from aria_conformance.core.roles import assert_aria_roles
from aria_conformance.core.wait import wait_for
from aria_conformance.suites.base import WidgetSuite
from aria_conformance.utils.exceptions import AttributeMismatch

if TYPE_CHECKING:
    from aria_conformance.core.context import TestContext
    from aria_conformance.core.protocols import ElementHandle
    from aria_conformance.core.registry import TestRegistry

EXAMPLE_REF = "content/patterns/radio/examples/radio-rating.html"

RADIOGROUP = '#ex1 [role="radiogroup"]'
RADIO = '#ex1 [role="radio"]'
INNER_RADIO = '[role="radio"]'
FIRST_GROUP_RADIOS = '#ex1 [role="radiogroup"]:nth-of-type(1) [role="radio"]'

suite = WidgetSuite(EXAMPLE_REF)


def build(registry: TestRegistry) -> None:
    suite.build(registry)


async def _expect_checked(
    ctx: TestContext, radios: list[ElementHandle], index: int, action: str
) -> None:
    """Wait for focus on radio index, then require it to be checked."""

    async def focused() -> bool:
        return await check_focus(ctx, FIRST_GROUP_RADIOS, index)

    await wait_for(
        focused,
        ctx.wait_time,
        f"focus on radio {index} {action}",
        interval_ms=ctx.poll_interval,
    )
    checked = await ctx.session.get_attribute(radios[index], "aria-checked")
    if checked != Present("true"):
        raise AttributeMismatch(
            f'Radio {index} should have "aria-checked" set to \'true\' {action}, '
            f"got {describe_value(checked)}"
        )


async def _advance_through_group(ctx: TestContext, key: str) -> None:
    radios = await ctx.query_elements(FIRST_GROUP_RADIOS)
    for index in range(len(radios)):
        target = (index + 1) % len(radios)
        await ctx.session.send_keys(radios[index], key)
        await _expect_checked(ctx, radios, target, f"after {key} on radio {index}")


async def _retreat_through_group(ctx: TestContext, key: str) -> None:
    radios = await ctx.query_elements(FIRST_GROUP_RADIOS)
    last = len(radios) - 1
    await ctx.session.send_keys(radios[0], key)
    await _expect_checked(ctx, radios, last, f"after {key} on radio 0")
    for index in range(last, 0, -1):
        await ctx.session.send_keys(radios[index], key)
        await _expect_checked(ctx, radios, index - 1, f"after {key} on radio {index}")


# Attributes


@suite.case('role="none" on SVG element', "svg-none")
async def svg_none(ctx: TestContext) -> None:
    await assert_aria_roles(ctx, "ex1", "none", "1", "svg")


@suite.case('role="radiogroup" on div element', "radiogroup-role")
async def radiogroup_role(ctx: TestContext) -> None:
    await assert_aria_roles(ctx, "ex1", "radiogroup", "1", "div")


@suite.case('"aria-labelledby" attribute on radiogroup', "radiogroup-aria-labelledby")
async def radiogroup_aria_labelledby(ctx: TestContext) -> None:
    await assert_aria_labelledby(ctx, RADIOGROUP)


@suite.case('role="radio" on g elements', "radio-role")
async def radio_role(ctx: TestContext) -> None:
    await assert_aria_roles(ctx, "ex1", "radio", "5", "g")


@suite.case("aria-label on g[role=radio] element", "radio-aria-label")
async def radio_aria_label(ctx: TestContext) -> None:
    await assert_aria_label_exists(ctx, RADIO)


@suite.case("roving tabindex on radio elements", "radio-tabindex")
async def radio_tabindex(ctx: TestContext) -> None:
    await assert_roving_tabindex(ctx, FIRST_GROUP_RADIOS, Key.ARROW_RIGHT)


@suite.case('"aria-checked" set on role="radio"', "radio-aria-checked")
async def radio_aria_checked(ctx: TestContext) -> None:
    # Nothing is checked on page load
    await assert_attribute_values(ctx, RADIO, "aria-checked", "false")

    for group in await ctx.query_elements(RADIOGROUP):
        radios = await ctx.query_elements(INNER_RADIO, within=group)
        for checked in range(len(radios)):
            await ctx.session.send_keys(radios[checked], " ")
            for index, radio in enumerate(radios):
                expected = Present("true" if index == checked else "false")
                actual = await ctx.session.get_attribute(radio, "aria-checked")
                if actual != expected:
                    raise AttributeMismatch(
                        f"Radio {checked} is checked, so radio {index} should have "
                        f'"aria-checked" set to {describe_value(expected)}, '
                        f"got {describe_value(actual)}"
                    )


# Keys


@suite.case("Moves focus to first or checked item", "key-tab")
async def key_tab(ctx: TestContext) -> None:
    first = f"{FIRST_GROUP_RADIOS}:nth-of-type(1)"
    await assert_tab_order(ctx, [first], start="#ex1")


@suite.case("Selects radio item", "key-space")
async def key_space(ctx: TestContext) -> None:
    first = f"{FIRST_GROUP_RADIOS}:nth-of-type(1)"
    await ctx.session.send_keys(await ctx.find(first), " ")
    await assert_attribute_values(ctx, first, "aria-checked", "true")


@suite.case("RIGHT ARROW changes focus and checks radio", "key-down-right-arrow")
async def key_right_arrow(ctx: TestContext) -> None:
    await _advance_through_group(ctx, Key.ARROW_RIGHT)


@suite.case("DOWN ARROW changes focus and checks radio", "key-down-right-arrow")
async def key_down_arrow(ctx: TestContext) -> None:
    await _advance_through_group(ctx, Key.ARROW_DOWN)


@suite.case("LEFT ARROW changes focus and checks radio", "key-up-left-arrow")
async def key_left_arrow(ctx: TestContext) -> None:
    await _retreat_through_group(ctx, Key.ARROW_LEFT)


@suite.case("UP ARROW changes focus and checks radio", "key-up-left-arrow")
async def key_up_arrow(ctx: TestContext) -> None:
    await _retreat_through_group(ctx, Key.ARROW_UP)
