"""Unit tests for condition polling.

Tests cover:
- wait_for returning the first truthy predicate value
- Timeout with a diagnostic naming the condition
- ElementNotFound retried, other exceptions propagated
- WaitCondition wrapper
- wait_for_attribute_change with present, empty and absent values
"""

import asyncio
import time

import pytest

from aria_conformance.core.protocols import ABSENT, Present
from aria_conformance.core.wait import (
    WaitCondition,
    wait_for,
    wait_for_attribute_change,
)
from aria_conformance.utils.exceptions import (
    ElementNotFound,
    StaleReference,
    WaitTimeout,
)

PAGE = """<html><body>
<input id="owner" aria-activedescendant="">
<div id="plain"></div>
</body></html>"""


class Countdown:
    """Predicate that returns falsy values until called `ready_after` times."""

    def __init__(self, ready_after: int, value: object = True) -> None:
        self.ready_after = ready_after
        self.value = value
        self.calls = 0

    async def __call__(self) -> object:
        self.calls += 1
        return self.value if self.calls >= self.ready_after else None


class TestWaitFor:
    """Tests for wait_for()."""

    @pytest.mark.asyncio
    async def test_returns_immediately_when_true(self) -> None:
        """A predicate that already holds is evaluated exactly once."""
        predicate = Countdown(1)
        assert await wait_for(predicate, 1000, "ready") is True
        assert predicate.calls == 1

    @pytest.mark.asyncio
    async def test_returns_truthy_value(self) -> None:
        """The predicate's value is returned, not just True."""
        predicate = Countdown(1, value="opt-3")
        assert await wait_for(predicate, 1000, "ready") == "opt-3"

    @pytest.mark.asyncio
    async def test_polls_until_true(self) -> None:
        """Predicate is re-evaluated until it becomes truthy."""
        predicate = Countdown(3)
        assert await wait_for(predicate, 1000, "ready", interval_ms=5)
        assert predicate.calls == 3

    @pytest.mark.asyncio
    async def test_times_out_with_description(self) -> None:
        """A predicate that never holds raises WaitTimeout naming it."""
        predicate = Countdown(10**6)
        with pytest.raises(WaitTimeout, match="focus to move") as exc_info:
            await wait_for(predicate, 50, "focus to move", interval_ms=10)
        assert exc_info.value.timeout_ms == 50
        assert "50ms" in str(exc_info.value)
        assert predicate.calls >= 2

    @pytest.mark.asyncio
    async def test_timeout_is_bounded(self) -> None:
        """wait_for gives up close to the deadline."""
        started = time.monotonic()
        with pytest.raises(WaitTimeout):
            await wait_for(Countdown(10**6), 100, "never", interval_ms=10)
        assert time.monotonic() - started < 1.0

    @pytest.mark.asyncio
    async def test_evaluates_again_at_deadline(self) -> None:
        """With an interval longer than the timeout, one final check runs."""
        predicate = Countdown(2)
        started = time.monotonic()
        assert await wait_for(predicate, 30, "ready", interval_ms=5000)
        assert predicate.calls == 2
        assert time.monotonic() - started < 1.0

    @pytest.mark.asyncio
    async def test_element_not_found_is_retried(self) -> None:
        """ElementNotFound means not rendered yet, so polling continues."""
        calls = 0

        async def predicate() -> bool:
            nonlocal calls
            calls += 1
            if calls < 3:
                raise ElementNotFound("#late")
            return True

        assert await wait_for(predicate, 1000, "late element", interval_ms=5)
        assert calls == 3

    @pytest.mark.asyncio
    async def test_timeout_chains_last_element_not_found(self) -> None:
        """The last ElementNotFound is kept as the timeout's cause."""

        async def predicate() -> bool:
            raise ElementNotFound("#never")

        with pytest.raises(WaitTimeout) as exc_info:
            await wait_for(predicate, 30, "element", interval_ms=5)
        assert isinstance(exc_info.value.__cause__, ElementNotFound)

    @pytest.mark.asyncio
    async def test_other_exceptions_propagate(self) -> None:
        """Exceptions other than ElementNotFound stop polling at once."""
        calls = 0

        async def predicate() -> bool:
            nonlocal calls
            calls += 1
            raise StaleReference("detached")

        with pytest.raises(StaleReference):
            await wait_for(predicate, 1000, "stale", interval_ms=5)
        assert calls == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("timeout_ms,interval_ms", [(0, 10), (-5, 10), (100, 0)])
    async def test_rejects_non_positive_durations(
        self, timeout_ms: int, interval_ms: int
    ) -> None:
        """Timeout and interval must both be positive."""
        with pytest.raises(ValueError):
            await wait_for(Countdown(1), timeout_ms, "x", interval_ms=interval_ms)


class TestWaitCondition:
    """Tests for the WaitCondition wrapper."""

    @pytest.mark.asyncio
    async def test_wait_returns_value(self) -> None:
        condition = WaitCondition(Countdown(2, value=7), 1000, "seven")
        assert await condition.wait(interval_ms=5) == 7

    @pytest.mark.asyncio
    async def test_wait_times_out(self) -> None:
        condition = WaitCondition(Countdown(10**6), 30, "never")
        with pytest.raises(WaitTimeout, match="never"):
            await condition.wait(interval_ms=5)


class TestWaitForAttributeChange:
    """Tests for wait_for_attribute_change()."""

    @pytest.mark.asyncio
    async def test_returns_new_value(self, make_ctx) -> None:
        """The changed value is returned once the widget updates it."""
        ctx = make_ctx(PAGE)
        owner = ctx.session.soup.find(id="owner")

        async def update() -> None:
            await asyncio.sleep(0.03)
            owner["aria-activedescendant"] = "opt-1"

        task = asyncio.create_task(update())
        value = await wait_for_attribute_change(
            ctx, "#owner", "aria-activedescendant", ""
        )
        await task
        assert value == Present("opt-1")

    @pytest.mark.asyncio
    async def test_unchanged_attribute_times_out(self, make_ctx) -> None:
        """An attribute that never changes raises WaitTimeout."""
        ctx = make_ctx(PAGE)
        with pytest.raises(WaitTimeout, match="aria-activedescendant"):
            await wait_for_attribute_change(
                ctx, "#owner", "aria-activedescendant", Present("")
            )

    @pytest.mark.asyncio
    async def test_unchanged_attribute_times_out_after_two_seconds(
        self, make_ctx
    ) -> None:
        """A 2000ms wait on a static attribute fails after about 2000ms."""
        ctx = make_ctx(PAGE)
        started = time.monotonic()
        with pytest.raises(WaitTimeout) as exc_info:
            await wait_for_attribute_change(
                ctx, "#owner", "aria-activedescendant", "", timeout_ms=2000
            )
        elapsed = time.monotonic() - started
        assert exc_info.value.timeout_ms == 2000
        assert 1.9 <= elapsed < 4.0

    @pytest.mark.asyncio
    async def test_absent_to_empty_is_a_change(self, make_ctx) -> None:
        """Adding an empty attribute is a change from ABSENT."""
        ctx = make_ctx(PAGE)
        ctx.session.soup.find(id="plain")["aria-expanded"] = ""
        value = await wait_for_attribute_change(ctx, "#plain", "aria-expanded", None)
        assert value == Present("")
        assert value != ABSENT

    @pytest.mark.asyncio
    async def test_removed_attribute_is_a_change(self, make_ctx) -> None:
        """Removing the attribute yields ABSENT."""
        ctx = make_ctx(PAGE)
        del ctx.session.soup.find(id="owner")["aria-activedescendant"]
        value = await wait_for_attribute_change(
            ctx, "#owner", "aria-activedescendant", ""
        )
        assert value == ABSENT
