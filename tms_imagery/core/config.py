"""HTTP transport settings loaded from environment variables.

These settings configure the bundled HTTP collaborators (descriptor
source and image loader).  The provider itself reads no environment and
applies no timeout of its own; a fetch waits for whatever the transport
decides.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if a value is out of
    its valid range.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from tms_imagery import __version__
from tms_imagery.core.exceptions import ValidationError

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


class ConfigValidationError(ValidationError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class HttpSettings:
    """Immutable HTTP transport settings.

    Attributes:
        timeout_s: Per-request timeout in seconds handed to ``httpx``.
        user_agent: ``User-Agent`` header sent with every request.
        follow_redirects: Whether redirects are followed.
    """

    timeout_s: float = 30.0
    user_agent: str = f"tms-imagery/{__version__}"
    follow_redirects: bool = True

    @classmethod
    def from_env(cls) -> HttpSettings:
        """Load and validate settings from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range or a boolean
                flag is not recognised.
            ValueError: If ``TMS_HTTP_TIMEOUT_S`` cannot be parsed.
        """
        settings = cls(
            timeout_s=float(os.getenv("TMS_HTTP_TIMEOUT_S", "30")),
            user_agent=os.getenv("TMS_HTTP_USER_AGENT", f"tms-imagery/{__version__}"),
            follow_redirects=_parse_bool(
                "TMS_HTTP_FOLLOW_REDIRECTS", os.getenv("TMS_HTTP_FOLLOW_REDIRECTS", "true")
            ),
        )
        _validate(settings)
        return settings


def _parse_bool(key: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigValidationError(key, raw, "must be a boolean (true/false)")


def _validate(settings: HttpSettings) -> None:
    """Validate setting ranges.  Raises ``ConfigValidationError``."""
    if settings.timeout_s <= 0:
        raise ConfigValidationError(
            "TMS_HTTP_TIMEOUT_S",
            settings.timeout_s,
            "must be > 0 (seconds)",
        )

    if not settings.user_agent:
        raise ConfigValidationError(
            "TMS_HTTP_USER_AGENT",
            settings.user_agent,
            "must not be empty",
        )
