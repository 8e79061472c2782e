"""Utilities module for aria-conformance."""

from .config import AppConfig, ConfigLoader
from .exceptions import (
    AriaConformanceError,
    AttributeMismatch,
    CaseAlreadyRun,
    ConfigurationError,
    ConformanceFailure,
    CountMismatch,
    ElementNotFound,
    InvariantViolation,
    SequenceMismatch,
    SessionError,
    StaleReference,
    UnknownBehavior,
    WaitTimeout,
)

__all__ = [
    "AppConfig",
    "AriaConformanceError",
    "AttributeMismatch",
    "CaseAlreadyRun",
    "ConfigLoader",
    "ConfigurationError",
    "ConformanceFailure",
    "CountMismatch",
    "ElementNotFound",
    "InvariantViolation",
    "SequenceMismatch",
    "SessionError",
    "StaleReference",
    "UnknownBehavior",
    "WaitTimeout",
]
