"""Shared pytest fixtures for aria-conformance tests.

This module provides common fixtures used across unit and integration tests.
Fixtures include the in-memory DOM session (see fake_dom.py), the widget
models of the example pages (see fake_widgets.py), session factories,
specification catalogs, config and a TestContext builder.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

from aria_conformance.core.context import TestContext
from aria_conformance.core.protocols import BehaviorRecord
from aria_conformance.core.registry import TestRegistry
from aria_conformance.services.catalog import HtmlSpecificationCatalog, MappingCatalog
from aria_conformance.utils.config import AppConfig
from fake_dom import FakeSession, FakeSessionFactory, WidgetFactory
from fake_widgets import (
    COMBOBOX_REF,
    RADIO_REF,
    TEST_REF,
    AutocompleteCombobox,
    combobox_page,
    radio_rating_page,
    rating_radio_group,
)


@pytest.fixture
def app_config(tmp_path: Path) -> AppConfig:
    """AppConfig with short waits so failing oracles finish quickly.

    Returns:
        AppConfig: Configuration rooted at tmp_path with a 300ms wait time.
    """
    return AppConfig(
        examples_dir=tmp_path,
        wait_time=300,
        poll_interval=10,
        navigation_timeout=5000,
    )


@pytest.fixture
def behavior() -> BehaviorRecord:
    """Behavior record for contexts built outside the registry."""
    return BehaviorRecord(TEST_REF, "test-behavior", "Behavior under test.")


@pytest.fixture
def make_ctx(
    app_config: AppConfig, behavior: BehaviorRecord
) -> Callable[..., TestContext]:
    """Build a TestContext over a fresh FakeSession.

    Usage:
        ctx = make_ctx("<html>...</html>", rating_radio_group())
    """

    def _make(html: str, *widgets: WidgetFactory) -> TestContext:
        return TestContext(
            session=FakeSession(html, widgets),
            behavior=behavior,
            wait_time=app_config.wait_time,
            poll_interval=app_config.poll_interval,
        )

    return _make


@pytest.fixture
def radio_ctx(make_ctx: Callable[..., TestContext]) -> TestContext:
    """Context on the rating radio group page."""
    return make_ctx(radio_rating_page(), rating_radio_group())


@pytest.fixture
def combobox_ctx(make_ctx: Callable[..., TestContext]) -> TestContext:
    """Context on the autocomplete combobox page."""
    return make_ctx(combobox_page(), AutocompleteCombobox)


@pytest.fixture
def example_pages() -> dict[str, str]:
    return {RADIO_REF: radio_rating_page(), COMBOBOX_REF: combobox_page()}


@pytest.fixture
def examples_dir(tmp_path: Path, example_pages: dict[str, str]) -> Path:
    """Directory holding the example pages at their example refs."""
    for ref, html in example_pages.items():
        path = tmp_path / ref
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(html, encoding="utf-8")
    return tmp_path


@pytest.fixture
def session_factory(example_pages: dict[str, str]) -> FakeSessionFactory:
    """Session factory serving the example pages with their widget models."""
    return FakeSessionFactory(
        example_pages,
        widgets={
            RADIO_REF: [rating_radio_group()],
            COMBOBOX_REF: [AutocompleteCombobox],
        },
    )


@pytest.fixture
def html_catalog(examples_dir: Path) -> HtmlSpecificationCatalog:
    return HtmlSpecificationCatalog(examples_dir)


@pytest.fixture
def mapping_catalog() -> MappingCatalog:
    return MappingCatalog(
        {
            TEST_REF: {
                "test-behavior": "Behavior under test.",
                "other-behavior": "Another documented behavior.",
            }
        }
    )


@pytest.fixture
def registry(mapping_catalog: MappingCatalog, app_config: AppConfig) -> TestRegistry:
    return TestRegistry(mapping_catalog, app_config)
