"""Configuration and environment handling for wbglance."""

import os
from pathlib import Path

from pydantic import BaseModel, Field

__all__ = [
    "ClientSettings",
    "get_config_dir",
    "get_settings",
    "is_debug",
]

DEFAULT_BASE_URL = "https://api.wandb.ai"


class ClientSettings(BaseModel):
    """Settings for talking to the remote tracking service.

    All settings can be customized via environment variables.
    """

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Base URL of the service; the GraphQL endpoint is <base_url>/graphql",
    )

    timeout: float = Field(
        default=30.0,
        gt=0,
        description="Per-request timeout in seconds",
    )

    chart_max_points: int = Field(
        default=1_000,
        ge=3,
        description="Downsample metric series for charts when longer than this",
    )

    @property
    def graphql_url(self) -> str:
        """Full URL of the GraphQL endpoint."""
        return f"{self.base_url.rstrip('/')}/graphql"

    @classmethod
    def from_env(cls) -> "ClientSettings":
        """Create ClientSettings from environment variables.

        Environment variables:
        - WBGLANCE_BASE_URL: Service base URL (default: https://api.wandb.ai)
        - WBGLANCE_TIMEOUT: Request timeout in seconds (default: 30)
        - WBGLANCE_CHART_MAX_POINTS: Chart downsampling threshold (default: 1000)
        """
        return cls(
            base_url=os.environ.get("WBGLANCE_BASE_URL") or cls.model_fields["base_url"].default,
            timeout=float(os.environ.get("WBGLANCE_TIMEOUT", cls.model_fields["timeout"].default)),
            chart_max_points=int(os.environ.get("WBGLANCE_CHART_MAX_POINTS", cls.model_fields["chart_max_points"].default)),
        )


# Global settings instance
_settings: ClientSettings | None = None


def get_settings() -> ClientSettings:
    """Get client settings.

    Returns cached instance if already initialized.
    """
    global _settings
    if _settings is None:
        _settings = ClientSettings.from_env()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None


# Forbidden system directories that cannot be used as config directories
_FORBIDDEN_PATHS = frozenset(["/", "/etc", "/sys", "/dev", "/bin", "/sbin", "/usr", "/var", "/boot", "/proc"])


def _validate_config_dir(config_path: Path) -> None:
    """Validate that config directory is not a dangerous system path.

    Args:
        config_path: Path to validate

    Raises:
        ValueError: If path is a forbidden system directory
    """
    resolved_str = str(config_path.resolve())

    for forbidden in _FORBIDDEN_PATHS:
        if resolved_str == forbidden or resolved_str.rstrip("/") == forbidden:
            raise ValueError(f"WBGLANCE_CONFIG_DIR cannot be set to system directory: {forbidden}")


def get_config_dir() -> Path:
    """Get the configuration directory for wbglance.

    Resolution priority:
    1. WBGLANCE_CONFIG_DIR environment variable (if set)
    2. XDG_CONFIG_HOME/wbglance (if XDG_CONFIG_HOME is set)
    3. ~/.config/wbglance (fallback)

    Returns:
        Path object pointing to the configuration directory.

    Raises:
        ValueError: If WBGLANCE_CONFIG_DIR points to a system directory
    """
    config_dir = os.environ.get("WBGLANCE_CONFIG_DIR")
    if config_dir:
        config_path = Path(config_dir).expanduser().resolve()
        _validate_config_dir(config_path)
        return config_path

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        return Path(xdg_config_home).expanduser() / "wbglance"

    return Path.home() / ".config" / "wbglance"


def is_debug() -> bool:
    """Check if debug logging is requested.

    Returns:
        True if WBGLANCE_DEBUG is set to "1", False otherwise.
    """
    return os.environ.get("WBGLANCE_DEBUG") == "1"
