"""Core protocols and data types for aria-conformance.

This module defines the foundational types and protocols that all other
components depend on. It includes:
- Present/Absent attribute values, kept as two distinct variants
- Key constants for keyboard dispatch
- Data classes for behavior records and test case results
- Protocol definitions for the browser session, session factory and
  specification catalog
"""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol


@dataclass(frozen=True)
class Present:
    """An accessibility attribute that exists on the element.

    Attributes:
        value: The attribute value. May be the empty string.
    """

    value: str


@dataclass(frozen=True)
class Absent:
    """An accessibility attribute that is not set on the element at all."""

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = Absent()

AttributeValue = Present | Absent


def describe_value(value: AttributeValue) -> str:
    """Render an attribute value for diagnostics."""
    if isinstance(value, Present):
        return repr(value.value)
    return "<absent>"


class NamedKey(str):
    """A non-printing key, distinguished from typed text by its type."""

    __slots__ = ()


class Key:
    """Keys that can be passed to SessionProtocol.send_keys.

    Values are the key names understood by the browser's keyboard API.
    Plain strings passed alongside these are typed character by character.
    """

    TAB = NamedKey("Tab")
    ENTER = NamedKey("Enter")
    ESCAPE = NamedKey("Escape")
    BACK_SPACE = NamedKey("Backspace")
    DELETE = NamedKey("Delete")
    ARROW_UP = NamedKey("ArrowUp")
    ARROW_DOWN = NamedKey("ArrowDown")
    ARROW_LEFT = NamedKey("ArrowLeft")
    ARROW_RIGHT = NamedKey("ArrowRight")
    HOME = NamedKey("Home")
    END = NamedKey("End")
    PAGE_UP = NamedKey("PageUp")
    PAGE_DOWN = NamedKey("PageDown")
    ALT = NamedKey("Alt")
    CONTROL = NamedKey("Control")
    SHIFT = NamedKey("Shift")
    META = NamedKey("Meta")

    MODIFIERS = frozenset({ALT, CONTROL, SHIFT, META})


class Outcome(Enum):
    """Terminal outcome of a test case."""

    PASS = "pass"
    FAIL = "fail"
    ERROR = "error"


@dataclass(frozen=True)
class BehaviorRecord:
    """A documented behavior of an example widget.

    Attributes:
        example_ref: Path of the example page, e.g.
            "content/patterns/radio/examples/radio-rating.html".
        behavior_id: Identifier unique within the example, e.g. "radio-role".
        description: Specification text describing the behavior.
    """

    example_ref: str
    behavior_id: str
    description: str


@dataclass(frozen=True)
class CaseResult:
    """Result of running one test case.

    Attributes:
        description: The test description given at registration.
        behavior: The specification behavior the test verifies.
        outcome: PASS, FAIL or ERROR.
        message: Failure or error message, empty on PASS.
        elapsed_ms: Wall-clock duration of the run.
    """

    description: str
    behavior: BehaviorRecord
    outcome: Outcome
    message: str = ""
    elapsed_ms: int = 0

    @property
    def passed(self) -> bool:
        return self.outcome is Outcome.PASS

    def diagnostic(self) -> str:
        """Return a report tying the outcome to the specification text.

        Returns:
            Multi-line string naming the example, behavior id, the
            specification description and, when not passing, the message.
        """
        lines = [
            f"[{self.outcome.name}] {self.behavior.example_ref} "
            f"({self.behavior.behavior_id}): {self.description}",
            f"  Specification: {self.behavior.description}",
        ]
        if self.message:
            lines.append(f"  {self.message}")
        return "\n".join(lines)


class ElementHandle(Protocol):
    """Opaque reference to a rendered node in one session.

    Handles are borrowed per call and never owned. Using a handle whose node
    was removed from the document raises StaleReference.
    """


class SessionProtocol(Protocol):
    """Protocol defining the remote browser session capability.

    This protocol abstracts the automation transport, allowing a Playwright
    implementation for real browsers or an in-memory implementation for
    testing the oracles themselves.
    """

    async def find_element(
        self, css: str, within: ElementHandle | None = None
    ) -> ElementHandle:
        """Return the first element matching css.

        Args:
            css: CSS selector.
            within: Optional element to scope the query to.

        Raises:
            ElementNotFound: If nothing matches.
        """
        ...

    async def find_elements(
        self, css: str, within: ElementHandle | None = None
    ) -> list[ElementHandle]:
        """Return every element matching css, in document order."""
        ...

    async def get_attribute(
        self, handle: ElementHandle, name: str
    ) -> AttributeValue:
        """Read an attribute as Present(value) or ABSENT."""
        ...

    async def get_property(self, handle: ElementHandle, name: str) -> Any:
        """Read a live DOM property, e.g. an input's current value."""
        ...

    async def get_tag_name(self, handle: ElementHandle) -> str:
        """Return the element's native tag name."""
        ...

    async def get_text(self, handle: ElementHandle) -> str:
        """Return the element's rendered text."""
        ...

    async def is_displayed(self, handle: ElementHandle) -> bool:
        """Return whether the element is visible."""
        ...

    async def send_keys(self, handle: ElementHandle, *keys: str) -> None:
        """Focus the element if needed and dispatch keys.

        Dispatch only: this does not wait for the widget to react.
        Modifier keys stay held until all keys in the call are sent.
        """
        ...

    async def execute_script(self, script: str, *args: Any) -> Any:
        """Evaluate a script in the page.

        The script receives args as a single array. Element handles in args
        are passed as DOM nodes, and a DOM node result is returned as an
        element handle.
        """
        ...

    async def release(self, handle: ElementHandle) -> None:
        """Drop an element handle returned by execute_script.

        The handle must not be used afterwards.
        """
        ...


class SessionFactoryProtocol(Protocol):
    """Opens exclusive sessions, one per test case."""

    def open_session(
        self, example_ref: str
    ) -> AbstractAsyncContextManager[SessionProtocol]:
        """Return an async context manager yielding a session on the example.

        The session is released when the context exits, on every path.
        """
        ...


class CatalogProtocol(Protocol):
    """Specification catalog mapping behavior ids to their description."""

    def resolve(self, example_ref: str, behavior_id: str) -> str:
        """Return the specification text for a behavior.

        Raises:
            UnknownBehavior: If the example does not document behavior_id.
        """
        ...

    def behaviors(self, example_ref: str) -> list[BehaviorRecord]:
        """Return every behavior documented for an example."""
        ...
