"""Playwright-based implementation of the remote session capability.

This module adapts Playwright's async API to SessionProtocol. A
PlaywrightSessionFactory owns one browser (launched, or attached over the
Chrome DevTools Protocol) and opens a fresh browser context per test case,
so no two test cases ever share a session.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from playwright.async_api import (
    Browser,
    ElementHandle,
    Page,
    Playwright,
    async_playwright,
)
from playwright.async_api import (
    Error as PlaywrightError,
)

from aria_conformance.core.protocols import (
    ABSENT,
    AttributeValue,
    Key,
    NamedKey,
    Present,
)
from aria_conformance.utils.exceptions import (
    ElementNotFound,
    SessionError,
    StaleReference,
)

if TYPE_CHECKING:
    from aria_conformance.utils.config import AppConfig

logger = logging.getLogger(__name__)

# Playwright error fragments meaning the node left the document
STALE_MARKERS = ("not attached", "detached", "Node is not connected")

FOCUS_IF_NEEDED_SCRIPT = (
    "el => { if (document.activeElement !== el) { el.focus(); } }"
)

TEXT_SCRIPT = (
    "el => (el instanceof HTMLElement ? el.innerText : el.textContent) || ''"
)


class PlaywrightElement:
    """Element handle borrowed from a PlaywrightSession."""

    __slots__ = ("handle",)

    def __init__(self, handle: ElementHandle) -> None:
        self.handle = handle

    def __repr__(self) -> str:
        return f"PlaywrightElement({self.handle!r})"


class PlaywrightSession:
    """SessionProtocol implementation driving one Playwright page.

    Playwright errors are translated: a detached node raises StaleReference,
    anything else raises SessionError.

    Attributes:
        page: The page showing the example under test.
    """

    def __init__(self, page: Page) -> None:
        self.page = page

    @asynccontextmanager
    async def _guard(self, action: str) -> AsyncIterator[None]:
        try:
            yield
        except PlaywrightError as e:
            message = str(e)
            if any(marker in message for marker in STALE_MARKERS):
                raise StaleReference(
                    f"Element is no longer attached to the document ({action})"
                ) from e
            raise SessionError(f"Failed to {action}: {message}") from e

    async def _attached(self, element: PlaywrightElement) -> ElementHandle:
        """Return the underlying handle, failing if its node was removed."""
        async with self._guard("check element"):
            connected = await element.handle.evaluate("el => el.isConnected")
        if not connected:
            raise StaleReference("Element is no longer attached to the document")
        return element.handle

    async def find_element(
        self, css: str, within: PlaywrightElement | None = None
    ) -> PlaywrightElement:
        """Return the first element matching css.

        Raises:
            ElementNotFound: If nothing matches.
        """
        root = await self._attached(within) if within is not None else self.page
        async with self._guard(f"query {css}"):
            handle = await root.query_selector(css)
        if handle is None:
            raise ElementNotFound(css)
        return PlaywrightElement(handle)

    async def find_elements(
        self, css: str, within: PlaywrightElement | None = None
    ) -> list[PlaywrightElement]:
        root = await self._attached(within) if within is not None else self.page
        async with self._guard(f"query {css}"):
            handles = await root.query_selector_all(css)
        return [PlaywrightElement(h) for h in handles]

    async def get_attribute(
        self, element: PlaywrightElement, name: str
    ) -> AttributeValue:
        handle = await self._attached(element)
        async with self._guard(f"read attribute {name}"):
            value = await handle.get_attribute(name)
        return ABSENT if value is None else Present(value)

    async def get_property(self, element: PlaywrightElement, name: str) -> Any:
        handle = await self._attached(element)
        async with self._guard(f"read property {name}"):
            prop = await handle.get_property(name)
            value = await prop.json_value()
            await prop.dispose()
        return value

    async def get_tag_name(self, element: PlaywrightElement) -> str:
        handle = await self._attached(element)
        async with self._guard("read tag name"):
            return await handle.evaluate("el => el.tagName.toLowerCase()")

    async def get_text(self, element: PlaywrightElement) -> str:
        handle = await self._attached(element)
        async with self._guard("read text"):
            return await handle.evaluate(TEXT_SCRIPT)

    async def is_displayed(self, element: PlaywrightElement) -> bool:
        handle = await self._attached(element)
        async with self._guard("check visibility"):
            return await handle.is_visible()

    async def send_keys(self, element: PlaywrightElement, *keys: str) -> None:
        """Focus element unless it already has focus, then dispatch keys.

        NamedKey values are pressed; modifiers among them stay held until the
        end of the call. Any other string is typed character by character.
        """
        handle = await self._attached(element)
        keyboard = self.page.keyboard
        held: list[str] = []
        async with self._guard("send keys"):
            await handle.evaluate(FOCUS_IF_NEEDED_SCRIPT)
            try:
                for key in keys:
                    if isinstance(key, NamedKey) and key in Key.MODIFIERS:
                        await keyboard.down(key)
                        held.append(key)
                    elif isinstance(key, NamedKey):
                        await keyboard.press(key)
                    else:
                        await keyboard.type(key)
            finally:
                for key in reversed(held):
                    await keyboard.up(key)

    async def execute_script(self, script: str, *args: Any) -> Any:
        """Evaluate script with args passed as one array.

        Returns:
            A PlaywrightElement when the script returns a DOM node, otherwise
            the JSON-serializable result. A returned element keeps its page
            handle until passed to release().
        """
        arg = [a.handle if isinstance(a, PlaywrightElement) else a for a in args]
        async with self._guard("execute script"):
            result = await self.page.evaluate_handle(script, arg)
            element = result.as_element()
            if element is not None:
                return PlaywrightElement(element)
            try:
                return await result.json_value()
            finally:
                await result.dispose()

    async def release(self, element: PlaywrightElement) -> None:
        async with self._guard("release element"):
            await element.handle.dispose()


class PlaywrightSessionFactory:
    """Opens one isolated Playwright session per test case.

    Supports two modes:
    - Normal mode: launches Chromium (headless unless configured otherwise)
    - CDP mode: attaches to a running browser via Chrome DevTools Protocol

    Example:
        >>> async with PlaywrightSessionFactory(config) as factory:
        ...     async with factory.open_session(example_ref) as session:
        ...         element = await session.find_element("#ex1")
    """

    def __init__(self, config: AppConfig) -> None:
        self.config = config
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None

    @property
    def is_cdp_connection(self) -> bool:
        return self.config.cdp_url is not None

    async def launch(self) -> None:
        """Start Playwright and launch or attach to the browser.

        Raises:
            SessionError: If the browser cannot be launched or reached.
        """
        self._playwright = await async_playwright().start()
        try:
            if self.config.cdp_url:
                self._browser = await self._playwright.chromium.connect_over_cdp(
                    self.config.cdp_url
                )
            else:
                self._browser = await self._playwright.chromium.launch(
                    headless=self.config.headless
                )
        except Exception as e:
            await self._playwright.stop()
            self._playwright = None
            target = self.config.cdp_url or "chromium"
            raise SessionError(f"Cannot start browser session ({target}): {e}") from e
        logger.info(
            "Connected to browser over CDP"
            if self.is_cdp_connection
            else "Launched chromium"
        )

    async def close(self) -> None:
        """Close the browser and stop Playwright.

        A browser attached over CDP is externally managed and left running.
        """
        if self._browser and not self.is_cdp_connection:
            await self._browser.close()
        if self._playwright:
            await self._playwright.stop()
        self._browser = None
        self._playwright = None

    async def __aenter__(self) -> PlaywrightSessionFactory:
        await self.launch()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    @asynccontextmanager
    async def open_session(self, example_ref: str) -> AsyncIterator[PlaywrightSession]:
        """Open a fresh browser context on the example page.

        The context is closed when the block exits, whatever the outcome.

        Raises:
            RuntimeError: If the factory has not been launched.
            SessionError: If the example page cannot be loaded.
        """
        if not self._browser:
            raise RuntimeError("Browser not launched")
        url = self.config.example_url(example_ref)

        try:
            context = await self._browser.new_context()
        except PlaywrightError as e:
            raise SessionError(f"Cannot open browser context: {e}") from e
        try:
            page = await context.new_page()
            try:
                await page.goto(url, timeout=self.config.navigation_timeout)
            except PlaywrightError as e:
                raise SessionError(f"Failed to navigate to {url}: {e}") from e
            logger.debug(f"Opened session on {url}")
            yield PlaywrightSession(page)
        finally:
            await context.close()
