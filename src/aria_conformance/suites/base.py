"""Base class for widget suites.

A suite groups the test cases of one example page. Cases are declared at
import time with the case() decorator and registered with a TestRegistry by
build(), which resolves every behavior id against the registry's catalog.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from aria_conformance.core.registry import CheckProcedure, TestRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SuiteCase:
    """A declared, not yet registered, test case."""

    description: str
    behavior_id: str
    check: CheckProcedure


class WidgetSuite:
    """Test cases for one example page.

    Attributes:
        example_ref: The example page every case runs against.
        cases: Declared cases in declaration order.
    """

    def __init__(self, example_ref: str) -> None:
        self.example_ref = example_ref
        self.cases: list[SuiteCase] = []

    def case(
        self, description: str, behavior_id: str
    ) -> Callable[[CheckProcedure], CheckProcedure]:
        """Declare the decorated check as a case for behavior_id."""

        def decorator(func: CheckProcedure) -> CheckProcedure:
            self.cases.append(SuiteCase(description, behavior_id, func))
            return func

        return decorator

    def behavior_ids(self) -> set[str]:
        return {c.behavior_id for c in self.cases}

    def build(self, registry: TestRegistry) -> None:
        """Register every declared case.

        Raises:
            UnknownBehavior: If a case names a behavior the catalog does not
                document. Nothing after that case is registered.
        """
        for case in self.cases:
            registry.aria_test(
                case.description, self.example_ref, case.behavior_id, case.check
            )
        logger.info(f"Registered {len(self.cases)} cases for {self.example_ref}")
