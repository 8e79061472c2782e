"""State machine for the test case lifecycle.

A test case is created at registration, executed exactly once and ends in
one terminal state. python-statemachine enforces that a finished case is
never re-entered.

States:
- registered (initial)
- running
- passed, failed, errored (final)
"""

from statemachine import State as SMState
from statemachine import StateMachine

from aria_conformance.core.protocols import Outcome


class CaseLifecycle(StateMachine):
    """Lifecycle of a single test case.

    Attributes:
        outcome: The terminal outcome, or None until the case finishes.
    """

    registered = SMState(initial=True)
    running = SMState()

    passed = SMState(final=True)
    failed = SMState(final=True)
    errored = SMState(final=True)

    start = registered.to(running)

    # finish: running -> terminal state matching the outcome
    # Note: using 'result' because 'target' is reserved by statemachine
    finish = (
        running.to(passed, cond="result_is_pass")
        | running.to(failed, cond="result_is_fail")
        | running.to(errored, cond="result_is_error")
    )

    def __init__(self) -> None:
        """Initialize the lifecycle with no outcome."""
        self.outcome: Outcome | None = None
        super().__init__()

    def result_is_pass(self, result: Outcome) -> bool:
        return result is Outcome.PASS

    def result_is_fail(self, result: Outcome) -> bool:
        return result is Outcome.FAIL

    def result_is_error(self, result: Outcome) -> bool:
        return result is Outcome.ERROR

    def on_enter_state(self, target: SMState) -> None:
        """Record the outcome when a final state is entered."""
        if target.final:
            self.outcome = {
                "passed": Outcome.PASS,
                "failed": Outcome.FAIL,
                "errored": Outcome.ERROR,
            }[target.id]

    @property
    def is_finished(self) -> bool:
        return self.outcome is not None
