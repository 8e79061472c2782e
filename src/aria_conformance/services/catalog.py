"""Specification catalogs mapping example behaviors to their documentation.

Example pages document each testable behavior in their keyboard-support and
role/state/property tables, with the row carrying a data-test-id attribute:

    <tr data-test-id="radio-role">
      <th scope="row"><code>radio</code></th>
      <td><code>g</code></td>
      <td>Identifies the element as a radio button.</td>
    </tr>

HtmlSpecificationCatalog reads those rows; MappingCatalog holds the same
information in memory.
"""

import logging
from pathlib import Path

from bs4 import BeautifulSoup

from aria_conformance.core.protocols import BehaviorRecord
from aria_conformance.utils.exceptions import ConfigurationError, UnknownBehavior

logger = logging.getLogger(__name__)

TEST_ID_ATTRIBUTE = "data-test-id"


def parse_behaviors(example_ref: str, html_content: str) -> list[BehaviorRecord]:
    """Extract documented behaviors from an example page.

    Args:
        example_ref: Path of the example page, recorded on each behavior.
        html_content: The page HTML.

    Returns:
        One BehaviorRecord per data-test-id element, in document order. The
        description is the element's text with whitespace collapsed. When an
        id appears more than once, the first occurrence wins.
    """
    soup = BeautifulSoup(html_content, "html.parser")
    records: dict[str, BehaviorRecord] = {}
    for tag in soup.find_all(attrs={TEST_ID_ATTRIBUTE: True}):
        behavior_id = tag[TEST_ID_ATTRIBUTE].strip()
        if not behavior_id:
            continue
        if behavior_id in records:
            logger.warning(f"Duplicate behavior id '{behavior_id}' in {example_ref}")
            continue
        records[behavior_id] = BehaviorRecord(
            example_ref=example_ref,
            behavior_id=behavior_id,
            description=" ".join(tag.get_text(" ").split()),
        )
    return list(records.values())


class HtmlSpecificationCatalog:
    """Catalog reading behaviors from example pages on disk.

    Pages are parsed once and cached.

    Attributes:
        examples_dir: Root directory example refs are relative to.
    """

    def __init__(self, examples_dir: Path) -> None:
        self.examples_dir = Path(examples_dir)
        self._cache: dict[str, dict[str, BehaviorRecord]] = {}

    def _load(self, example_ref: str) -> dict[str, BehaviorRecord]:
        if example_ref not in self._cache:
            path = self.examples_dir / example_ref
            try:
                html_content = path.read_text(encoding="utf-8")
            except OSError as e:
                raise ConfigurationError(
                    f"Cannot read example page {path}: {e}"
                ) from e
            records = parse_behaviors(example_ref, html_content)
            logger.debug(f"Loaded {len(records)} behaviors from {path}")
            self._cache[example_ref] = {r.behavior_id: r for r in records}
        return self._cache[example_ref]

    def resolve(self, example_ref: str, behavior_id: str) -> str:
        """Return the documentation for a behavior.

        Raises:
            UnknownBehavior: If the page does not document behavior_id.
            ConfigurationError: If the page cannot be read.
        """
        record = self._load(example_ref).get(behavior_id)
        if record is None:
            raise UnknownBehavior(example_ref, behavior_id)
        return record.description

    def behaviors(self, example_ref: str) -> list[BehaviorRecord]:
        return list(self._load(example_ref).values())


class MappingCatalog:
    """In-memory catalog: {example_ref: {behavior_id: description}}."""

    def __init__(self, entries: dict[str, dict[str, str]]) -> None:
        self._entries = entries

    def resolve(self, example_ref: str, behavior_id: str) -> str:
        """Return the documentation for a behavior.

        Raises:
            UnknownBehavior: If the example does not document behavior_id.
        """
        try:
            return self._entries[example_ref][behavior_id]
        except KeyError:
            raise UnknownBehavior(example_ref, behavior_id) from None

    def behaviors(self, example_ref: str) -> list[BehaviorRecord]:
        return [
            BehaviorRecord(example_ref, behavior_id, description)
            for behavior_id, description in self._entries.get(example_ref, {}).items()
        ]
