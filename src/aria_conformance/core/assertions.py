"""Attribute and state assertions over one or many matched elements.

An attribute read yields Present(value) or ABSENT, and the assertions here
never conflate the two: an attribute that is present but empty satisfies
assert_attribute_values(..., None) and fails assert_attribute_dne().
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from aria_conformance.core.protocols import ABSENT, Present, describe_value
from aria_conformance.services.selectors import coerce_selector
from aria_conformance.utils.exceptions import AttributeMismatch, ElementNotFound

if TYPE_CHECKING:
    from aria_conformance.core.context import TestContext
    from aria_conformance.services.selectors import Selector

logger = logging.getLogger(__name__)


async def assert_attribute_values(
    ctx: TestContext,
    selector: str | Selector,
    attribute: str,
    expected: str | None,
) -> None:
    """Assert every matched element has attribute equal to expected.

    Args:
        ctx: Test context.
        selector: Elements to check.
        attribute: Attribute name.
        expected: Expected value. None means the attribute must be present
            with an empty value; a missing attribute does not satisfy it.

    Raises:
        ElementNotFound: If nothing matches and expected is not None.
        AttributeMismatch: If any element's value differs.
    """
    sel = coerce_selector(selector)
    elements = await ctx.query_elements(sel, allow_empty=True)
    if not elements:
        if expected is not None:
            raise ElementNotFound(
                sel.describe(), f'expected {attribute}="{expected}"'
            )
        logger.debug(f"No elements for {sel.describe()}, nothing to check")
        return

    want = Present(expected if expected is not None else "")
    for index, element in enumerate(elements):
        actual = await ctx.session.get_attribute(element, attribute)
        if actual != want:
            raise AttributeMismatch(
                f'Element {index} of {sel.describe()} should have "{attribute}" '
                f"set to {describe_value(want)}, got {describe_value(actual)}"
            )


async def assert_attribute_dne(
    ctx: TestContext, selector: str | Selector, attribute: str
) -> None:
    """Assert attribute does not exist on any matched element.

    Raises:
        ElementNotFound: If nothing matches.
        AttributeMismatch: If any element has the attribute, even empty.
    """
    sel = coerce_selector(selector)
    elements = await ctx.query_elements(sel)
    for index, element in enumerate(elements):
        actual = await ctx.session.get_attribute(element, attribute)
        if actual != ABSENT:
            raise AttributeMismatch(
                f'Element {index} of {sel.describe()} should not have "{attribute}", '
                f"got {describe_value(actual)}"
            )


async def assert_aria_label_exists(
    ctx: TestContext, selector: str | Selector
) -> None:
    """Assert every matched element has a non-empty aria-label.

    Raises:
        ElementNotFound: If nothing matches.
        AttributeMismatch: If aria-label is missing or blank.
    """
    sel = coerce_selector(selector)
    for index, element in enumerate(await ctx.query_elements(sel)):
        label = await ctx.session.get_attribute(element, "aria-label")
        if not isinstance(label, Present) or not label.value.strip():
            raise AttributeMismatch(
                f'Element {index} of {sel.describe()} should have a non-empty '
                f'"aria-label", got {describe_value(label)}'
            )


async def assert_aria_labelledby(
    ctx: TestContext, selector: str | Selector
) -> None:
    """Assert every matched element is labelled by existing, non-empty elements.

    Each id token in aria-labelledby must resolve to exactly one element
    whose text is not blank.

    Raises:
        ElementNotFound: If nothing matches.
        AttributeMismatch: If the attribute is missing or a reference is
            dangling, ambiguous or empty.
    """
    sel = coerce_selector(selector)
    for index, element in enumerate(await ctx.query_elements(sel)):
        value = await ctx.session.get_attribute(element, "aria-labelledby")
        ids = value.value.split() if isinstance(value, Present) else []
        if not ids:
            raise AttributeMismatch(
                f'Element {index} of {sel.describe()} should have "aria-labelledby", '
                f"got {describe_value(value)}"
            )
        for label_id in ids:
            labels = await ctx.session.find_elements(f'[id="{label_id}"]')
            if len(labels) != 1:
                raise AttributeMismatch(
                    f'"aria-labelledby" on element {index} of {sel.describe()} '
                    f'references id "{label_id}", which matches {len(labels)} elements'
                )
            if not (await ctx.session.get_text(labels[0])).strip():
                raise AttributeMismatch(
                    f'Label "{label_id}" for element {index} of {sel.describe()} '
                    "has no text"
                )
