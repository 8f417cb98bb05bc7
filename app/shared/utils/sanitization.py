"""Sanitization of user-written text that ends up in outbound HTML email."""

import re
from typing import ClassVar

import nh3


class EmailBodySanitizer:
    """
    Clean a user-written email body before it is embedded in an HTML layout.

    Bodies are typed in a textarea, so newlines become ``<br>``. A small set of
    formatting tags is allowed through; scripts, styles and event handlers are
    stripped by nh3.
    """

    ALLOWED_TAGS: ClassVar[set[str]] = {"a", "b", "br", "em", "i", "li", "ol", "p", "strong", "u", "ul"}
    ALLOWED_ATTRIBUTES: ClassVar[dict[str, set[str]]] = {"a": {"href", "title"}}
    EMAIL_PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

    @classmethod
    def to_html(cls, body: str) -> str:
        """Sanitize body and convert newlines to <br>.

        Args:
            body: Plain text (optionally with light HTML) typed by the user.

        Returns:
            HTML fragment safe to embed in the email layout.
        """
        if not body:
            return ""
        cleaned = nh3.clean(
            body,
            tags=cls.ALLOWED_TAGS,
            attributes=cls.ALLOWED_ATTRIBUTES,
        )
        return cleaned.replace("\r\n", "\n").replace("\n", "<br>")

    @classmethod
    def is_valid_email(cls, value: str) -> bool:
        """Return True for addresses shaped like local@domain.tld."""
        return bool(value) and bool(cls.EMAIL_PATTERN.match(value))


def split_addresses(value: str | None) -> list[str]:
    """Split a comma-separated address list, dropping blanks."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]
