"""Registry of the built-in widget suites."""

import difflib
from dataclasses import dataclass

from aria_conformance.suites import combobox_autocomplete_both, radio_rating
from aria_conformance.suites.base import SuiteCase, WidgetSuite


@dataclass(frozen=True)
class SuiteInfo:
    """Information about a built-in suite."""

    id: str
    name: str
    description: str
    suite: WidgetSuite

    @property
    def example_ref(self) -> str:
        return self.suite.example_ref


SUITE_REGISTRY: list[SuiteInfo] = [
    SuiteInfo(
        id="radio-rating",
        name="Rating Radio Group",
        description="SVG star rating with roving tabindex",
        suite=radio_rating.suite,
    ),
    SuiteInfo(
        id="combobox-autocomplete-both",
        name="Editable Combobox With Both List and Inline Autocomplete",
        description="US states combobox using aria-activedescendant",
        suite=combobox_autocomplete_both.suite,
    ),
]


def get_all_suites() -> list[SuiteInfo]:
    """Get all suites sorted alphabetically by ID."""
    return sorted(SUITE_REGISTRY, key=lambda s: s.id)


def get_suite_by_id(suite_id: str) -> SuiteInfo | None:
    """Get a suite by its ID (case-insensitive).

    Args:
        suite_id: The suite ID to look up.

    Returns:
        SuiteInfo if found, None otherwise.
    """
    suite_id_lower = suite_id.lower()
    for info in SUITE_REGISTRY:
        if info.id == suite_id_lower:
            return info
    return None


def suggest_suite(typo: str) -> str | None:
    """Suggest a suite ID for a typo using fuzzy matching.

    Args:
        typo: The mistyped suite ID.

    Returns:
        The closest matching suite ID if found (cutoff=0.6), None otherwise.
    """
    matches = difflib.get_close_matches(
        typo.lower(),
        [s.id for s in SUITE_REGISTRY],
        n=1,
        cutoff=0.6,
    )
    return matches[0] if matches else None


__all__ = [
    "SUITE_REGISTRY",
    "SuiteCase",
    "SuiteInfo",
    "WidgetSuite",
    "get_all_suites",
    "get_suite_by_id",
    "suggest_suite",
]
