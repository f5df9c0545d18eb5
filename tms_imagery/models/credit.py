"""Attribution shown to end users while a provider's imagery is displayed."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Credit:
    """Attribution for a data source.

    Attributes:
        text: Text to display.
        image_url: Optional logo URL.
        link: Optional URL the credit links to.
    """

    text: str = ""
    image_url: str = ""
    link: str = ""

    @classmethod
    def coerce(cls, value: Credit | str | None) -> Credit | None:
        """Wrap a plain string into a ``Credit``; pass ``Credit``/``None`` through.

        Raises:
            TypeError: If *value* is neither a string nor a ``Credit``.
        """
        if value is None or isinstance(value, Credit):
            return value
        if isinstance(value, str):
            return cls(text=value)
        msg = f"credit must be a str or Credit, got {type(value).__name__}"
        raise TypeError(msg)
