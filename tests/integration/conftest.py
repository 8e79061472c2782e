"""Fixtures for integration tests.

These tests drive a real Chromium through Playwright. They are skipped when
the browser cannot be launched (run `playwright install chromium` first).
"""

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
import pytest_asyncio
from dotenv import load_dotenv

from aria_conformance.core.browser import PlaywrightSessionFactory
from aria_conformance.utils.config import AppConfig, ConfigLoader
from aria_conformance.utils.exceptions import SessionError
from static_pages import STATIC_PAGE, STATIC_REF

# Load .env file at test startup
load_dotenv(Path(__file__).parent.parent.parent / ".env")


async def _launched(config: AppConfig) -> PlaywrightSessionFactory:
    factory = PlaywrightSessionFactory(config)
    try:
        await factory.launch()
    except SessionError as e:
        pytest.skip(f"Browser not available: {e}")
    return factory


@pytest.fixture
def static_config(tmp_path: Path) -> AppConfig:
    """Config serving STATIC_PAGE from a temporary directory."""
    page = tmp_path / STATIC_REF
    page.parent.mkdir(parents=True)
    page.write_text(STATIC_PAGE, encoding="utf-8")
    return AppConfig(examples_dir=tmp_path, wait_time=2000, poll_interval=20)


@pytest_asyncio.fixture
async def static_factory(
    static_config: AppConfig,
) -> AsyncIterator[PlaywrightSessionFactory]:
    """Launched session factory for the static page."""
    factory = await _launched(static_config)
    yield factory
    await factory.close()


@pytest.fixture
def live_config() -> AppConfig:
    """Config for the real example pages, from ARIA_* environment variables."""
    config = ConfigLoader.load()
    if not config.examples_dir:
        pytest.skip("Set ARIA_EXAMPLES_DIR to run the suites on the example pages")
    return config


@pytest_asyncio.fixture
async def live_factory(
    live_config: AppConfig,
) -> AsyncIterator[PlaywrightSessionFactory]:
    factory = await _launched(live_config)
    yield factory
    await factory.close()
