"""Condition polling for eventually-consistent browser state.

Widgets update focus and attributes asynchronously after a key is
dispatched. Oracles that depend on such an update wait for it with
wait_for() rather than sleeping, so they neither race the update nor hang
when it never happens.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from aria_conformance.core.protocols import (
    ABSENT,
    AttributeValue,
    Present,
    describe_value,
)
from aria_conformance.utils.exceptions import ElementNotFound, WaitTimeout

if TYPE_CHECKING:
    from aria_conformance.core.context import TestContext
    from aria_conformance.services.selectors import Selector

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_MS = 50

Predicate = Callable[[], Awaitable[Any]]


async def wait_for(
    predicate: Predicate,
    timeout_ms: int,
    description: str,
    *,
    interval_ms: int = DEFAULT_INTERVAL_MS,
) -> Any:
    """Evaluate predicate until it returns a truthy value.

    The predicate is evaluated immediately, then every interval_ms, and once
    more at the deadline. ElementNotFound raised by the predicate means "not
    yet rendered" and is retried; any other exception propagates at once.

    Args:
        predicate: Async callable reading session state.
        timeout_ms: Maximum time to wait in milliseconds.
        description: What is being waited for, used in the timeout message.
        interval_ms: Delay between evaluations in milliseconds.

    Returns:
        The first truthy value returned by predicate.

    Raises:
        WaitTimeout: If predicate is not truthy within timeout_ms.
        ValueError: If timeout_ms or interval_ms is not positive.
    """
    if timeout_ms <= 0 or interval_ms <= 0:
        raise ValueError("timeout_ms and interval_ms must be positive")

    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout_ms / 1000
    attempts = 0
    last_missing: ElementNotFound | None = None

    while True:
        attempts += 1
        try:
            result = await predicate()
        except ElementNotFound as e:
            last_missing = e
            result = None
        if result:
            logger.debug(f"Condition met after {attempts} attempt(s): {description}")
            return result

        remaining = deadline - loop.time()
        if remaining <= 0:
            error = WaitTimeout(description, timeout_ms)
            if last_missing is not None:
                raise error from last_missing
            raise error
        await asyncio.sleep(min(interval_ms / 1000, remaining))


@dataclass
class WaitCondition:
    """A predicate with its timeout and description.

    Attributes:
        predicate: Async callable reading session state.
        timeout_ms: Maximum time to wait in milliseconds.
        description: What is being waited for.
    """

    predicate: Predicate
    timeout_ms: int
    description: str

    async def wait(self, interval_ms: int = DEFAULT_INTERVAL_MS) -> Any:
        """Poll until the predicate holds. See wait_for()."""
        return await wait_for(
            self.predicate,
            self.timeout_ms,
            self.description,
            interval_ms=interval_ms,
        )


async def wait_for_attribute_change(
    ctx: TestContext,
    selector: str | Selector,
    attribute: str,
    original: AttributeValue | str | None,
    timeout_ms: int | None = None,
) -> AttributeValue:
    """Wait until an attribute of the first match differs from original.

    Typical use is waiting for aria-activedescendant to move after a key is
    dispatched to a combobox.

    Args:
        ctx: Test context.
        selector: Selector of the element owning the attribute.
        attribute: Attribute name.
        original: Value before the action. A string is compared against
            Present(string), None against ABSENT.
        timeout_ms: Timeout; defaults to ctx.wait_time.

    Returns:
        The new attribute value.

    Raises:
        WaitTimeout: If the attribute does not change in time.
    """
    if original is None:
        original = ABSENT
    elif isinstance(original, str):
        original = Present(original)

    async def changed() -> AttributeValue | None:
        element = await ctx.find(selector)
        value = await ctx.session.get_attribute(element, attribute)
        return value if value != original else None

    return await wait_for(
        changed,
        timeout_ms or ctx.wait_time,
        f'"{attribute}" to change from {describe_value(original)}',
        interval_ms=ctx.poll_interval,
    )
