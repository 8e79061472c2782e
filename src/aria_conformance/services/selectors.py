"""Selector types for locating widget elements.

This module provides the Selector dataclass, which is either a plain CSS
pattern or a container id plus an accessibility role. Role selectors match
both an explicit role attribute and the native elements that carry the role
implicitly.
"""

from dataclasses import dataclass

# Native elements that expose a role without a role attribute. Each entry is
# qualified with :not([role]) when used, so an explicit role always wins.
IMPLICIT_ROLE_SELECTORS: dict[str, list[str]] = {
    "button": [
        "button",
        'input[type="button"]',
        'input[type="submit"]',
        'input[type="reset"]',
    ],
    "checkbox": ['input[type="checkbox"]'],
    "radio": ['input[type="radio"]'],
    "link": ["a[href]", "area[href]"],
    "textbox": [
        "input:not([type]):not([list])",
        'input[type="text"]:not([list])',
        'input[type="email"]:not([list])',
        'input[type="tel"]:not([list])',
        'input[type="url"]:not([list])',
        "textarea",
    ],
    "combobox": ["select:not([multiple]):not([size])", "input[list]"],
    "listbox": ["select[multiple]", "select[size]"],
    "option": ["option"],
    "list": ["ul", "ol"],
    "listitem": ["li"],
    "heading": ["h1", "h2", "h3", "h4", "h5", "h6"],
    "group": ["fieldset", "details"],
    "table": ["table"],
    "row": ["tr"],
    "cell": ["td"],
    "navigation": ["nav"],
    "main": ["main"],
    "img": ['img:not([alt=""])'],
}


def split_selector_list(css: str) -> list[str]:
    """Split a CSS selector list on its top-level commas.

    Commas inside brackets, parentheses or quoted strings belong to a single
    selector, e.g. ``:is(.a, .b)`` or ``[aria-label="x, y"]``.
    """
    parts: list[str] = []
    depth = 0
    quote = ""
    start = 0
    escaped = False
    for index, char in enumerate(css):
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif quote:
            if char == quote:
                quote = ""
        elif char in "\"'":
            quote = char
        elif char in "([":
            depth += 1
        elif char in ")]":
            depth -= 1
        elif char == "," and depth == 0:
            parts.append(css[start:index].strip())
            start = index + 1
    parts.append(css[start:].strip())
    return [part for part in parts if part]


@dataclass(frozen=True)
class Selector:
    """Scoped query resolving to elements in document order.

    Attributes:
        css: CSS pattern (mutually exclusive with role).
        container_id: Optional id of the element the query is scoped to.
        role: Accessibility role to match (mutually exclusive with css).
        implicit: Whether a role selector also matches native elements
            carrying the role implicitly.
    """

    css: str | None = None
    container_id: str | None = None
    role: str | None = None
    implicit: bool = True

    def __post_init__(self) -> None:
        """Validate that exactly one of css and role is given."""
        if bool(self.css) == bool(self.role):
            raise ValueError("Selector requires exactly one of css or role")

    @classmethod
    def by_role(
        cls, container_id: str, role: str, implicit: bool = True
    ) -> "Selector":
        """Build a role selector scoped to a container id."""
        return cls(container_id=container_id, role=role, implicit=implicit)

    def to_css(self) -> str:
        """Return the CSS selector list this selector resolves with."""
        scope = f'[id="{self.container_id}"] ' if self.container_id else ""
        if self.css:
            if not scope:
                return self.css
            return ", ".join(
                f"{scope}{part}" for part in split_selector_list(self.css)
            )

        patterns = [f'[role="{self.role}"]']
        if self.implicit:
            patterns += [
                f"{tag}:not([role])"
                for tag in IMPLICIT_ROLE_SELECTORS.get(self.role or "", [])
            ]
        return ", ".join(f"{scope}{pattern}" for pattern in patterns)

    def describe(self) -> str:
        """Return a human-readable description for diagnostics."""
        if self.css:
            if self.container_id:
                return f"CSS: #{self.container_id} {self.css}"
            return f"CSS: {self.css}"
        scope = f" in #{self.container_id}" if self.container_id else ""
        return f"ARIA: role={self.role}{scope}"


def coerce_selector(selector: "str | Selector") -> Selector:
    """Accept a CSS string or a Selector and return a Selector."""
    if isinstance(selector, Selector):
        return selector
    return Selector(css=selector)
