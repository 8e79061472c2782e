"""Role catalog assertion: role count and native tag within a container."""

from __future__ import annotations

from typing import TYPE_CHECKING

from aria_conformance.services.selectors import Selector
from aria_conformance.utils.exceptions import AttributeMismatch, CountMismatch

if TYPE_CHECKING:
    from aria_conformance.core.context import TestContext


async def assert_aria_roles(
    ctx: TestContext,
    container_id: str,
    role: str,
    expected_count: int | str,
    expected_tag: str,
) -> None:
    """Assert a container holds exactly expected_count elements with role.

    Elements match by explicit role attribute or by implicit native role.
    Every match must also be an expected_tag element, which catches the
    right role on the wrong element.

    Args:
        ctx: Test context.
        container_id: Id of the element scoping the search, e.g. "ex1".
        role: Accessibility role, e.g. "radio".
        expected_count: Exact number of matches required.
        expected_tag: Native tag name every match must have, compared
            case-insensitively.

    Raises:
        CountMismatch: If the number of matches is not expected_count.
        AttributeMismatch: If a match has a different tag name.
    """
    count = int(expected_count)
    selector = Selector.by_role(container_id, role)
    elements = await ctx.query_elements(selector, allow_empty=True)

    if len(elements) != count:
        raise CountMismatch(
            f'{count} elements with role="{role}" should be found in '
            f"#{container_id}, found {len(elements)}"
        )

    for index, element in enumerate(elements):
        tag = await ctx.session.get_tag_name(element)
        if tag.lower() != expected_tag.lower():
            raise AttributeMismatch(
                f'Element {index} with role="{role}" in #{container_id} should be '
                f'a "{expected_tag}" element, found "{tag.lower()}"'
            )
