"""Unit tests for the role catalog assertion."""

import pytest

from aria_conformance.core.roles import assert_aria_roles
from aria_conformance.utils.exceptions import AttributeMismatch, CountMismatch
from fake_widgets import radio_rating_page

NATIVE_PAGE = """<html><body>
<fieldset id="ex2">
  <input type="radio" name="size" value="s">
  <input type="radio" name="size" value="m">
  <input type="radio" name="size" value="l" role="switch">
</fieldset>
<div id="ex3">
  <div role="radio">A</div>
  <span role="radio">B</span>
</div>
</body></html>"""


class TestAssertAriaRoles:
    """Tests for assert_aria_roles()."""

    @pytest.mark.asyncio
    async def test_rating_radios_are_g_elements(self, radio_ctx) -> None:
        await assert_aria_roles(radio_ctx, "ex1", "radio", 5, "g")

    @pytest.mark.asyncio
    async def test_count_may_be_a_string(self, radio_ctx) -> None:
        await assert_aria_roles(radio_ctx, "ex1", "radiogroup", "1", "div")

    @pytest.mark.asyncio
    async def test_tag_is_case_insensitive(self, radio_ctx) -> None:
        await assert_aria_roles(radio_ctx, "ex1", "radio", 5, "G")

    @pytest.mark.asyncio
    async def test_extra_element_is_count_mismatch(self, make_ctx) -> None:
        """A sixth role-bearing element fails the count."""
        ctx = make_ctx(radio_rating_page(radios=6))
        with pytest.raises(CountMismatch, match="found 6"):
            await assert_aria_roles(ctx, "ex1", "radio", 5, "g")

    @pytest.mark.asyncio
    async def test_extra_native_radio_is_count_mismatch(self, make_ctx) -> None:
        """A sixth radio without a role attribute still counts by its implicit role."""
        page = radio_rating_page().replace(
            "</svg>", '</svg><input type="radio" name="extra">', 1
        )
        ctx = make_ctx(page)
        with pytest.raises(CountMismatch, match="found 6"):
            await assert_aria_roles(ctx, "ex1", "radio", 5, "g")

    @pytest.mark.asyncio
    async def test_missing_role_is_count_mismatch(self, radio_ctx) -> None:
        with pytest.raises(CountMismatch, match="found 0"):
            await assert_aria_roles(radio_ctx, "ex1", "checkbox", 1, "g")

    @pytest.mark.asyncio
    async def test_zero_expected_and_found_passes(self, radio_ctx) -> None:
        await assert_aria_roles(radio_ctx, "ex1", "checkbox", 0, "input")

    @pytest.mark.asyncio
    async def test_wrong_tag_is_attribute_mismatch(self, make_ctx) -> None:
        """The right role on the wrong element is reported by index."""
        ctx = make_ctx(NATIVE_PAGE)
        with pytest.raises(AttributeMismatch, match='Element 1.*"div".*"span"'):
            await assert_aria_roles(ctx, "ex3", "radio", 2, "div")

    @pytest.mark.asyncio
    async def test_implicit_roles_are_counted(self, make_ctx) -> None:
        """Native radios count, but an explicit role overrides the native one."""
        ctx = make_ctx(NATIVE_PAGE)
        await assert_aria_roles(ctx, "ex2", "radio", 2, "input")
        await assert_aria_roles(ctx, "ex2", "switch", 1, "input")

    @pytest.mark.asyncio
    async def test_scoped_to_container(self, make_ctx) -> None:
        """Radios in other containers are not counted."""
        ctx = make_ctx(NATIVE_PAGE)
        with pytest.raises(CountMismatch, match="found 2"):
            await assert_aria_roles(ctx, "ex3", "radio", 4, "div")
