"""Core module for aria-conformance.

This module exports the oracles, the condition poller, the test case
registry and the foundational types they share.
"""

from aria_conformance.core.assertions import (
    assert_aria_label_exists,
    assert_aria_labelledby,
    assert_attribute_dne,
    assert_attribute_values,
)
from aria_conformance.core.browser import (
    PlaywrightElement,
    PlaywrightSession,
    PlaywrightSessionFactory,
)
from aria_conformance.core.context import TestContext
from aria_conformance.core.focus import (
    assert_aria_selected_and_activedescendant,
    assert_roving_tabindex,
    assert_tab_order,
    check_focus,
    confirm_cursor_index,
    is_focused,
)
from aria_conformance.core.protocols import (
    ABSENT,
    Absent,
    AttributeValue,
    BehaviorRecord,
    CaseResult,
    CatalogProtocol,
    ElementHandle,
    Key,
    NamedKey,
    Outcome,
    Present,
    SessionFactoryProtocol,
    SessionProtocol,
)
from aria_conformance.core.registry import AriaTestCase, TestRegistry
from aria_conformance.core.roles import assert_aria_roles
from aria_conformance.core.states import CaseLifecycle
from aria_conformance.core.wait import (
    WaitCondition,
    wait_for,
    wait_for_attribute_change,
)

__all__ = [
    "ABSENT",
    "Absent",
    "AriaTestCase",
    "AttributeValue",
    "BehaviorRecord",
    "CaseLifecycle",
    "CaseResult",
    "CatalogProtocol",
    "ElementHandle",
    "Key",
    "NamedKey",
    "Outcome",
    "PlaywrightElement",
    "PlaywrightSession",
    "PlaywrightSessionFactory",
    "Present",
    "SessionFactoryProtocol",
    "SessionProtocol",
    "TestContext",
    "TestRegistry",
    "WaitCondition",
    "assert_aria_label_exists",
    "assert_aria_labelledby",
    "assert_aria_roles",
    "assert_aria_selected_and_activedescendant",
    "assert_attribute_dne",
    "assert_attribute_values",
    "assert_roving_tabindex",
    "assert_tab_order",
    "check_focus",
    "confirm_cursor_index",
    "is_focused",
    "wait_for",
    "wait_for_attribute_change",
]
