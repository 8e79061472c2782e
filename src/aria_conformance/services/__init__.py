"""Services module: specification catalogs and selectors."""

from aria_conformance.services.catalog import (
    HtmlSpecificationCatalog,
    MappingCatalog,
    parse_behaviors,
)
from aria_conformance.services.selectors import Selector, coerce_selector

__all__ = [
    "HtmlSpecificationCatalog",
    "MappingCatalog",
    "Selector",
    "coerce_selector",
    "parse_behaviors",
]
