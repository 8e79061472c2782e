"""Unit tests for specification catalogs.

Tests cover:
- parse_behaviors ordering, text normalization and duplicates
- HtmlSpecificationCatalog reading and caching example pages
- MappingCatalog lookups
"""

import logging

import pytest

from aria_conformance.services.catalog import (
    HtmlSpecificationCatalog,
    MappingCatalog,
    parse_behaviors,
)
from aria_conformance.utils.exceptions import ConfigurationError, UnknownBehavior
from fake_widgets import COMBOBOX_REF, RADIO_BEHAVIORS, RADIO_REF

PAGE = """<html><body>
<table>
  <tr data-test-id="radio-role">
    <th scope="row"><code>radio</code></th>
    <td><code>g</code></td>
    <td>Identifies the   element
        as a radio button.</td>
  </tr>
  <tr data-test-id="key-tab"><th>Tab</th><td>Moves focus.</td></tr>
  <tr data-test-id="radio-role"><td>Duplicate row</td></tr>
  <tr data-test-id="  "><td>Blank id</td></tr>
  <tr><td>Undocumented row</td></tr>
</table>
</body></html>"""


class TestParseBehaviors:
    """Tests for parse_behaviors()."""

    def test_document_order(self) -> None:
        records = parse_behaviors("content/a.html", PAGE)
        assert [r.behavior_id for r in records] == ["radio-role", "key-tab"]

    def test_records_example_ref(self) -> None:
        records = parse_behaviors("content/a.html", PAGE)
        assert all(r.example_ref == "content/a.html" for r in records)

    def test_description_whitespace_collapsed(self) -> None:
        record = parse_behaviors("content/a.html", PAGE)[0]
        assert record.description == (
            "radio g Identifies the element as a radio button."
        )

    def test_first_duplicate_wins_with_warning(self, caplog) -> None:
        with caplog.at_level(logging.WARNING):
            records = parse_behaviors("content/a.html", PAGE)
        assert "Moves focus." not in records[0].description
        assert "Duplicate" not in records[0].description
        assert "Duplicate behavior id 'radio-role'" in caplog.text

    def test_page_without_rows(self) -> None:
        assert parse_behaviors("content/a.html", "<html></html>") == []


class TestHtmlSpecificationCatalog:
    """Tests for HtmlSpecificationCatalog."""

    def test_resolve(self, html_catalog) -> None:
        assert html_catalog.resolve(RADIO_REF, "key-space").endswith(
            RADIO_BEHAVIORS["key-space"]
        )

    def test_behaviors(self, html_catalog) -> None:
        ids = [r.behavior_id for r in html_catalog.behaviors(RADIO_REF)]
        assert ids == list(RADIO_BEHAVIORS)

    def test_unknown_behavior(self, html_catalog) -> None:
        with pytest.raises(UnknownBehavior) as exc_info:
            html_catalog.resolve(COMBOBOX_REF, "radio-role")
        assert exc_info.value.example_ref == COMBOBOX_REF

    def test_missing_page(self, html_catalog) -> None:
        with pytest.raises(ConfigurationError, match="Cannot read example page"):
            html_catalog.resolve("content/nowhere.html", "radio-role")

    def test_pages_are_cached(self, examples_dir) -> None:
        catalog = HtmlSpecificationCatalog(examples_dir)
        catalog.resolve(RADIO_REF, "radio-role")
        (examples_dir / RADIO_REF).unlink()
        assert catalog.resolve(RADIO_REF, "key-tab")

    def test_accepts_string_path(self, examples_dir) -> None:
        catalog = HtmlSpecificationCatalog(str(examples_dir))
        assert catalog.behaviors(COMBOBOX_REF)


class TestMappingCatalog:
    """Tests for MappingCatalog."""

    def test_resolve(self, mapping_catalog) -> None:
        text = mapping_catalog.resolve(
            "content/test/examples/test.html", "test-behavior"
        )
        assert text == "Behavior under test."

    def test_unknown_behavior(self, mapping_catalog) -> None:
        with pytest.raises(UnknownBehavior):
            mapping_catalog.resolve("content/test/examples/test.html", "nope")

    def test_unknown_example(self, mapping_catalog) -> None:
        with pytest.raises(UnknownBehavior):
            mapping_catalog.resolve("content/other.html", "test-behavior")

    def test_behaviors(self, mapping_catalog) -> None:
        records = mapping_catalog.behaviors("content/test/examples/test.html")
        assert [r.behavior_id for r in records] == ["test-behavior", "other-behavior"]
        assert mapping_catalog.behaviors("content/other.html") == []
