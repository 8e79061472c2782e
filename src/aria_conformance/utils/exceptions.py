"""Exception hierarchy for aria-conformance.

Failures that describe the widget under test derive from ConformanceFailure,
which is also an AssertionError so that a test case reports them as FAIL.
Errors in the observation apparatus (the browser transport) derive from
SessionError and are reported as ERROR.
"""


class AriaConformanceError(Exception):
    """Base exception for all aria-conformance errors."""


class ConformanceFailure(AriaConformanceError, AssertionError):
    """The widget under test did not behave as the specification requires."""


class ElementNotFound(ConformanceFailure):  # noqa: N818
    """A selector matched zero elements where at least one was required."""

    def __init__(self, selector: str, detail: str | None = None) -> None:
        """Initialize ElementNotFound with the selector that failed.

        Args:
            selector: Description of the selector that matched nothing.
            detail: Optional extra context for the diagnostic.
        """
        self.selector = selector
        message = f"No element matches selector: {selector}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


class StaleReference(ConformanceFailure):  # noqa: N818
    """An element handle refers to a node that is no longer in the document."""


class WaitTimeout(ConformanceFailure):  # noqa: N818
    """A wait condition did not become true within its timeout."""

    def __init__(self, description: str, timeout_ms: int) -> None:
        """Initialize WaitTimeout.

        Args:
            description: What was being waited for.
            timeout_ms: The timeout that elapsed, in milliseconds.
        """
        self.description = description
        self.timeout_ms = timeout_ms
        super().__init__(f"Timed out after {timeout_ms}ms: {description}")


class InvariantViolation(ConformanceFailure):  # noqa: N818
    """A focus-model invariant did not hold at an observed checkpoint."""


class SequenceMismatch(ConformanceFailure):  # noqa: N818
    """An ordered expectation (tab order, roving position) was violated.

    Attributes:
        expected_index: Position in the declared sequence that was expected.
        observed_index: Position actually observed, or None if the observed
            element is not part of the declared sequence.
    """

    def __init__(
        self,
        message: str,
        expected_index: int,
        observed_index: int | None,
    ) -> None:
        self.expected_index = expected_index
        self.observed_index = observed_index
        super().__init__(message)


class AttributeMismatch(ConformanceFailure):  # noqa: N818
    """An attribute, tag or property did not have the expected value."""


class CountMismatch(ConformanceFailure):  # noqa: N818
    """A selector resolved to a different number of elements than expected."""


class SessionError(AriaConformanceError):
    """The browser automation transport failed."""


class ConfigurationError(AriaConformanceError):
    """Invalid or missing configuration."""


class UnknownBehavior(AriaConformanceError):  # noqa: N818
    """A behavior id is not documented in the specification catalog.

    Raised while a suite is being built, so an undocumented test can never
    be registered.
    """

    def __init__(self, example_ref: str, behavior_id: str) -> None:
        """Initialize UnknownBehavior.

        Args:
            example_ref: The example page the behavior was looked up in.
            behavior_id: The behavior id that could not be resolved.
        """
        self.example_ref = example_ref
        self.behavior_id = behavior_id
        super().__init__(
            f"Behavior '{behavior_id}' is not documented in {example_ref}"
        )


class CaseAlreadyRun(AriaConformanceError):  # noqa: N818
    """A test case was executed more than once."""
