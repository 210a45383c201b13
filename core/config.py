"""
Converter Configuration Management for gws-markdown-docs.

Settings are read from environment variables once and cached. Invalid values
fail fast with ConfigurationError so that no request is ever emitted under a
broken configuration.
"""

import os
from dataclasses import dataclass

from core.errors import ConfigurationError

APP_NAME = "GWS Markdown Docs"
DEFAULT_CONFIG_DIR = "~/.config/gws-markdown-docs"

DEFAULT_BATCH_SIZE = 35
DEFAULT_CODE_FONT_FAMILY = "Consolas"
DEFAULT_CODE_FONT_SIZE_PT = 10

LIST_STYLE_PLAIN = "plain"
LIST_STYLE_NATIVE = "native"
LIST_STYLES = (LIST_STYLE_PLAIN, LIST_STYLE_NATIVE)


def _read_int(name: str, default: int | None) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw.strip())
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e


@dataclass(frozen=True)
class ConverterSettings:
    """
    Conversion and submission settings.

    Attributes:
        batch_size: Maximum requests per batchUpdate call.
        code_font_family: Fixed-width font applied to code blocks.
        code_font_size_pt: Point size applied to code blocks.
        list_style: "plain" (text only) or "native" (createParagraphBullets).
        image_width_pt: Default width for images written as ![alt](uri) lines.
        image_height_pt: Default height for images written as ![alt](uri) lines.
        token_file: Path to an authorized-user token file.
        log_level: Root log level name.
    """

    batch_size: int = DEFAULT_BATCH_SIZE
    code_font_family: str = DEFAULT_CODE_FONT_FAMILY
    code_font_size_pt: int = DEFAULT_CODE_FONT_SIZE_PT
    list_style: str = LIST_STYLE_PLAIN
    image_width_pt: int | None = None
    image_height_pt: int | None = None
    token_file: str = os.path.join(DEFAULT_CONFIG_DIR, "token.json")
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not isinstance(self.batch_size, int) or self.batch_size < 1:
            raise ConfigurationError(f"batch_size must be a positive integer, got {self.batch_size!r}")
        if not isinstance(self.code_font_size_pt, int) or self.code_font_size_pt < 1:
            raise ConfigurationError(f"code_font_size_pt must be a positive integer, got {self.code_font_size_pt!r}")
        if not self.code_font_family:
            raise ConfigurationError("code_font_family cannot be empty")
        if self.list_style not in LIST_STYLES:
            raise ConfigurationError(f"list_style must be one of {', '.join(LIST_STYLES)}, got {self.list_style!r}")
        for name in ("image_width_pt", "image_height_pt"):
            value = getattr(self, name)
            if value is not None and value < 1:
                raise ConfigurationError(f"{name} must be a positive integer when set, got {value!r}")

    @classmethod
    def from_env(cls) -> "ConverterSettings":
        """Build settings from MARKDOWN_DOCS_* environment variables."""
        config_dir = os.path.expanduser(os.getenv("MARKDOWN_DOCS_CONFIG_DIR", DEFAULT_CONFIG_DIR))
        return cls(
            batch_size=_read_int("MARKDOWN_DOCS_BATCH_SIZE", DEFAULT_BATCH_SIZE),
            code_font_family=os.getenv("MARKDOWN_DOCS_CODE_FONT", DEFAULT_CODE_FONT_FAMILY),
            code_font_size_pt=_read_int("MARKDOWN_DOCS_CODE_FONT_SIZE", DEFAULT_CODE_FONT_SIZE_PT),
            list_style=os.getenv("MARKDOWN_DOCS_LIST_STYLE", LIST_STYLE_PLAIN).strip().lower(),
            image_width_pt=_read_int("MARKDOWN_DOCS_IMAGE_WIDTH", None),
            image_height_pt=_read_int("MARKDOWN_DOCS_IMAGE_HEIGHT", None),
            token_file=os.path.expanduser(
                os.getenv("MARKDOWN_DOCS_TOKEN_FILE", os.path.join(config_dir, "token.json"))
            ),
            log_level=os.getenv("MARKDOWN_DOCS_LOG_LEVEL", "INFO").upper(),
        )

    def get_environment_summary(self) -> dict:
        """
        Get a summary of the current configuration.

        Returns:
            Dictionary with configuration summary
        """
        return {
            "batch_size": self.batch_size,
            "code_font_family": self.code_font_family,
            "code_font_size_pt": self.code_font_size_pt,
            "list_style": self.list_style,
            "image_size_pt": (self.image_width_pt, self.image_height_pt),
            "token_file_present": os.path.exists(self.token_file),
            "log_level": self.log_level,
        }


# Global configuration instance
_settings: ConverterSettings | None = None


def get_settings() -> ConverterSettings:
    """
    Get the global settings instance.

    Returns:
        The singleton ConverterSettings instance
    """
    global _settings
    if _settings is None:
        _settings = ConverterSettings.from_env()
    return _settings


def reload_settings() -> ConverterSettings:
    """
    Reload the settings from environment variables.

    This is useful for testing or when environment variables change.

    Returns:
        The reloaded ConverterSettings instance
    """
    global _settings
    _settings = ConverterSettings.from_env()
    return _settings
