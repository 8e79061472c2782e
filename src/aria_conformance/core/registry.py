"""Test case registry for specification-keyed widget tests.

Each test case binds a description, an example page, a behavior id from the
specification catalog and an async check procedure. Behavior ids are
resolved when the case is registered, so a suite referencing an
undocumented behavior fails to build instead of running silently.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from aria_conformance.core.context import TestContext
from aria_conformance.core.protocols import BehaviorRecord, CaseResult, Outcome
from aria_conformance.core.states import CaseLifecycle
from aria_conformance.utils.config import AppConfig
from aria_conformance.utils.exceptions import CaseAlreadyRun

if TYPE_CHECKING:
    from aria_conformance.core.protocols import (
        CatalogProtocol,
        SessionFactoryProtocol,
    )

logger = logging.getLogger(__name__)

CheckProcedure = Callable[[TestContext], Awaitable[None]]


class AriaTestCase:
    """One runnable, specification-keyed test case.

    Attributes:
        description: What the test checks.
        behavior: The resolved specification behavior.
        check: Async procedure receiving the TestContext.
        lifecycle: State machine enforcing a single execution.
    """

    def __init__(
        self,
        description: str,
        behavior: BehaviorRecord,
        check: CheckProcedure,
        config: AppConfig,
    ) -> None:
        self.description = description
        self.behavior = behavior
        self.check = check
        self.config = config
        self.lifecycle = CaseLifecycle()
        self.result: CaseResult | None = None

    @property
    def example_ref(self) -> str:
        return self.behavior.example_ref

    @property
    def behavior_id(self) -> str:
        return self.behavior.behavior_id

    @property
    def name(self) -> str:
        """Unique, readable name: example, description and behavior id."""
        return f"{self.example_ref} {self.description} ({self.behavior_id})"

    async def run(self, session_factory: SessionFactoryProtocol) -> CaseResult:
        """Execute the check procedure in its own session.

        The session is opened for this case only and is closed on every
        exit path. AssertionError (including every ConformanceFailure)
        yields FAIL; any other exception yields ERROR.

        Args:
            session_factory: Opens the exclusive session for the example.

        Returns:
            The CaseResult, also stored on self.result.

        Raises:
            CaseAlreadyRun: If the case was already started.
        """
        if self.lifecycle.current_state != self.lifecycle.registered:
            raise CaseAlreadyRun(f"Test case already run: {self.name}")
        self.lifecycle.start()

        started = time.monotonic()
        outcome = Outcome.PASS
        message = ""
        try:
            async with session_factory.open_session(self.example_ref) as session:
                ctx = TestContext(
                    session=session,
                    behavior=self.behavior,
                    wait_time=self.config.wait_time,
                    poll_interval=self.config.poll_interval,
                )
                await self.check(ctx)
        except AssertionError as e:
            outcome = Outcome.FAIL
            message = str(e) or type(e).__name__
        except Exception as e:
            outcome = Outcome.ERROR
            message = f"{type(e).__name__}: {e}"
            logger.debug(f"Error in {self.name}", exc_info=True)

        self.lifecycle.finish(result=outcome)
        self.result = CaseResult(
            description=self.description,
            behavior=self.behavior,
            outcome=outcome,
            message=message,
            elapsed_ms=int((time.monotonic() - started) * 1000),
        )
        logger.info(f"{outcome.name} {self.name}")
        return self.result


class TestRegistry:
    """Collects test cases and resolves their behaviors against a catalog.

    Example:
        >>> registry = TestRegistry(HtmlSpecificationCatalog(examples_dir))
        >>> @registry.aria_test('role="radio" on g elements', RATING, "radio-role")
        ... async def radio_role(ctx):
        ...     await assert_aria_roles(ctx, "ex1", "radio", 5, "g")
        >>> results = await registry.run_all(PlaywrightSessionFactory(config))
    """

    __test__ = False

    def __init__(
        self, catalog: CatalogProtocol, config: AppConfig | None = None
    ) -> None:
        """Initialize an empty registry.

        Args:
            catalog: Specification catalog used to resolve behavior ids.
            config: Configuration providing wait times; defaults apply if None.
        """
        self.catalog = catalog
        self.config = config or AppConfig()
        self.cases: list[AriaTestCase] = []

    def aria_test(
        self,
        description: str,
        example_ref: str,
        behavior_id: str,
        check: CheckProcedure | None = None,
    ) -> AriaTestCase | Callable[[CheckProcedure], CheckProcedure]:
        """Register a test case, directly or as a decorator.

        Args:
            description: What the test checks.
            example_ref: Example page the test runs against.
            behavior_id: Behavior id documented for the example.
            check: Async check procedure. When omitted, returns a decorator.

        Returns:
            The registered AriaTestCase, or a decorator registering the
            decorated function and returning it unchanged.

        Raises:
            UnknownBehavior: If the catalog does not document behavior_id.
        """
        if check is None:

            def decorator(func: CheckProcedure) -> CheckProcedure:
                self._register(description, example_ref, behavior_id, func)
                return func

            return decorator
        return self._register(description, example_ref, behavior_id, check)

    def _register(
        self,
        description: str,
        example_ref: str,
        behavior_id: str,
        check: CheckProcedure,
    ) -> AriaTestCase:
        text = self.catalog.resolve(example_ref, behavior_id)
        behavior = BehaviorRecord(
            example_ref=example_ref,
            behavior_id=behavior_id,
            description=text,
        )
        case = AriaTestCase(description, behavior, check, self.config)
        self.cases.append(case)
        logger.debug(f"Registered {case.name}")
        return case

    def covered_behaviors(self, example_ref: str) -> set[str]:
        """Return behavior ids of an example that have at least one test."""
        return {c.behavior_id for c in self.cases if c.example_ref == example_ref}

    def example_refs(self) -> list[str]:
        """Return the example pages with registered tests, in first-seen order."""
        return list(dict.fromkeys(c.example_ref for c in self.cases))

    async def run_all(
        self,
        session_factory: SessionFactoryProtocol,
        concurrency: int = 1,
    ) -> list[CaseResult]:
        """Run every registered case, each in its own session.

        Args:
            session_factory: Opens one exclusive session per case.
            concurrency: Maximum number of cases running at once.

        Returns:
            Results in registration order.
        """
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        semaphore = asyncio.Semaphore(concurrency)

        async def run_one(case: AriaTestCase) -> CaseResult:
            async with semaphore:
                return await case.run(session_factory)

        return list(await asyncio.gather(*(run_one(c) for c in self.cases)))
