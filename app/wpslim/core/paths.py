"""XDG-compliant path management for wpslim.

XDG defaults:
- Config: ~/.config/wpslim/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "wpslim"

# WordPress uploads location relative to the web root
DEFAULT_UPLOADS_SUBDIR = "wp-content/uploads"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/wpslim/ (or XDG_CONFIG_HOME/wpslim/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_config_path() -> Path:
    """Get the default configuration file path.

    Returns:
        Path to ~/.config/wpslim/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_user_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/wpslim/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def get_uploads_dir(html_dir: Path, uploads_subdir: str = DEFAULT_UPLOADS_SUBDIR) -> Path:
    """Resolve the uploads directory below a WordPress web root."""
    return html_dir / uploads_subdir
