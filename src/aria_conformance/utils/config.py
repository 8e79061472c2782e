"""Configuration management for aria-conformance."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from aria_conformance.utils.exceptions import ConfigurationError


@dataclass
class AppConfig:
    """Application configuration."""

    examples_dir: Path | None = None
    base_url: str | None = None
    cdp_url: str | None = None
    headless: bool = True
    wait_time: int = 10000  # ms, default bound for condition polling
    poll_interval: int = 50  # ms
    navigation_timeout: int = 30000  # ms

    def example_url(self, example_ref: str) -> str:
        """Build the URL an example page is served from.

        Args:
            example_ref: Path of the example page relative to the examples
                root, e.g. "content/patterns/radio/examples/radio-rating.html".

        Returns:
            The absolute URL to navigate to.

        Raises:
            ConfigurationError: If neither base_url nor examples_dir is set.
        """
        if self.base_url:
            return f"{self.base_url.rstrip('/')}/{example_ref.lstrip('/')}"
        if self.examples_dir:
            return (self.examples_dir / example_ref).resolve().as_uri()
        raise ConfigurationError(
            "Set ARIA_BASE_URL or ARIA_EXAMPLES_DIR to locate example pages"
        )


class ConfigLoader:
    """Loads configuration from environment variables."""

    @staticmethod
    def load() -> AppConfig:
        """Load configuration from environment.

        Raises:
            ConfigurationError: If configuration values are invalid.
        """
        load_dotenv()  # Load .env file if present

        examples_dir = os.environ.get("ARIA_EXAMPLES_DIR")

        return AppConfig(
            examples_dir=Path(examples_dir) if examples_dir else None,
            base_url=os.environ.get("ARIA_BASE_URL") or None,
            cdp_url=os.environ.get("ARIA_CDP_URL") or None,
            headless=ConfigLoader._get_bool_env("ARIA_HEADLESS", True),
            wait_time=ConfigLoader._get_int_env("ARIA_WAIT_TIME", 10000),
            poll_interval=ConfigLoader._get_int_env("ARIA_POLL_INTERVAL", 50),
            navigation_timeout=ConfigLoader._get_int_env(
                "ARIA_NAVIGATION_TIMEOUT", 30000
            ),
        )

    @staticmethod
    def _get_int_env(name: str, default: int) -> int:
        """Get a positive integer environment variable.

        Args:
            name: The environment variable name.
            default: The default value if not set.

        Returns:
            The integer value.

        Raises:
            ConfigurationError: If the value is not a positive integer.
        """
        value = os.environ.get(name)
        if value is None:
            return default
        try:
            parsed = int(value)
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid value for {name}: '{value}' is not a valid integer"
            ) from e
        if parsed <= 0:
            raise ConfigurationError(
                f"Invalid value for {name}: '{value}' must be positive"
            )
        return parsed

    @staticmethod
    def _get_bool_env(name: str, default: bool) -> bool:
        """Get a boolean environment variable.

        Accepts 1/0, true/false, yes/no and on/off in any case.

        Raises:
            ConfigurationError: If the value is not a recognised boolean.
        """
        value = os.environ.get(name)
        if value is None:
            return default
        normalized = value.strip().lower()
        if normalized in ("1", "true", "yes", "on"):
            return True
        if normalized in ("0", "false", "no", "off"):
            return False
        raise ConfigurationError(
            f"Invalid value for {name}: '{value}' is not a valid boolean"
        )
