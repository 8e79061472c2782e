"""Command-line interface for aria-conformance."""
