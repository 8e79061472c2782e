"""Per-test-case context passed explicitly into every oracle."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from aria_conformance.services.selectors import Selector, coerce_selector
from aria_conformance.utils.exceptions import ElementNotFound

if TYPE_CHECKING:
    from aria_conformance.core.protocols import (
        BehaviorRecord,
        ElementHandle,
        SessionProtocol,
    )


@dataclass
class TestContext:
    """Binds one exclusive session to the test case using it.

    Attributes:
        session: The session opened for this test case only.
        behavior: The specification behavior under test.
        wait_time: Default timeout for condition polling, in milliseconds.
        poll_interval: Interval between predicate evaluations, in milliseconds.
    """

    __test__ = False

    session: SessionProtocol
    behavior: BehaviorRecord
    wait_time: int = 10000
    poll_interval: int = 50

    @property
    def example_ref(self) -> str:
        return self.behavior.example_ref

    async def find(
        self, selector: str | Selector, within: ElementHandle | None = None
    ) -> ElementHandle:
        """Return the first element matching selector.

        Raises:
            ElementNotFound: If nothing matches.
        """
        return await self.session.find_element(
            coerce_selector(selector).to_css(), within
        )

    async def query_elements(
        self,
        selector: str | Selector,
        within: ElementHandle | None = None,
        allow_empty: bool = False,
    ) -> list[ElementHandle]:
        """Resolve selector to elements in document order.

        Args:
            selector: CSS string or Selector.
            within: Optional element to scope the query to.
            allow_empty: Return an empty list instead of failing.

        Raises:
            ElementNotFound: If nothing matches and allow_empty is False.
        """
        sel = coerce_selector(selector)
        elements = await self.session.find_elements(sel.to_css(), within)
        if not elements and not allow_empty:
            raise ElementNotFound(sel.describe())
        return elements
