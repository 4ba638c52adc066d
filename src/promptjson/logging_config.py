"""Logging configuration with sensitive data filtering."""

import logging
import re


class SensitiveDataFilter(logging.Filter):
    """Filter to mask API keys and tokens in logs."""

    # Patterns to match and replace sensitive data
    SENSITIVE_PATTERNS = [
        # API key fields
        (r'api[_-]?key["\']?\s*[:=]\s*["\']?([^"\'\s,}]+)', r"api_key=***REDACTED***"),
        # Key passed as a query parameter
        (r"([?&])key=[^&\s]+", r"\1key=***REDACTED***"),
        # Google API keys
        (r"AIza[0-9A-Za-z\-_]{35}", r"***GOOGLE_KEY_REDACTED***"),
        # Bearer tokens in Authorization headers
        (r"Bearer\s+([A-Za-z0-9\-._~+/]+=*)", r"Bearer ***REDACTED***"),
    ]

    def _mask(self, text: str) -> str:
        for pattern, replacement in self.SENSITIVE_PATTERNS:
            text = re.sub(pattern, replacement, text, flags=re.IGNORECASE)
        return text

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter and mask sensitive data in log messages."""
        if isinstance(record.msg, str):
            record.msg = self._mask(record.msg)

        if record.args and isinstance(record.args, tuple):
            record.args = tuple(
                self._mask(arg) if isinstance(arg, str) else arg for arg in record.args
            )

        return True


def setup_logging(settings):
    """
    Setup logging configuration with sensitive data filtering.

    Args:
        settings: Application settings instance
    """
    log_level = logging.DEBUG if settings.debug else logging.INFO

    handler = logging.StreamHandler()
    handler.addFilter(SensitiveDataFilter())

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[handler],
        force=True,  # Override any existing configuration
    )

    # Third-party HTTP client chatter stays out of debug output
    logging.getLogger("google_genai").setLevel(max(log_level, logging.INFO))
    logging.getLogger("httpx").setLevel(logging.WARNING)
