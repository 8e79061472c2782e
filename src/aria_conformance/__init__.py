"""aria-conformance: keyboard and ARIA conformance tests for widget examples."""

__version__ = "0.1.0"
