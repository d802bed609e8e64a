"""Platform path helpers for dotfilesctl's own files.

Locates the default configuration file and the log directory according to
OS conventions (XDG on Linux, ~/Library on macOS). Symlinks and POSIX
permission bits are required by the core, so Windows is not covered.

All functions return Path objects. Directories are NOT created automatically;
callers should call ``path.mkdir(parents=True, exist_ok=True)`` as needed.
"""

import os
import sys
from pathlib import Path

from .config import APP_NAME

__all__ = [
    'APP_NAME',
    'get_config_dir',
    'get_config_file_path',
    'get_logs_dir',
]


def _get_platform() -> str:
    """Detect the current platform.

    Returns:
        'darwin' or 'linux'
    """
    if sys.platform == 'darwin':
        return 'darwin'
    return 'linux'


def _get_xdg_path(xdg_var: str, default_subpath: str) -> Path:
    """Get XDG-compliant path with environment variable support.

    Args:
        xdg_var: XDG environment variable name (e.g., 'XDG_CONFIG_HOME')
        default_subpath: Default path relative to home (e.g., '.config')

    Returns:
        Path with APP_NAME appended
    """
    xdg_base = os.environ.get(xdg_var)
    if xdg_base:
        return Path(xdg_base) / APP_NAME
    return Path.home() / default_subpath / APP_NAME


def get_config_dir() -> Path:
    """Get platform-appropriate configuration directory.

    Returns:
        - macOS: ~/Library/Preferences/dotfilesctl
        - Linux: XDG_CONFIG_HOME/dotfilesctl or ~/.config/dotfilesctl
    """
    if _get_platform() == 'darwin':
        return Path.home() / 'Library' / 'Preferences' / APP_NAME
    return _get_xdg_path('XDG_CONFIG_HOME', '.config')


def get_logs_dir() -> Path:
    """Get platform-appropriate logs directory.

    Returns:
        - macOS: ~/Library/Logs/dotfilesctl
        - Linux: XDG_STATE_HOME/dotfilesctl/logs or ~/.local/state/dotfilesctl/logs
    """
    if _get_platform() == 'darwin':
        return Path.home() / 'Library' / 'Logs' / APP_NAME
    return _get_xdg_path('XDG_STATE_HOME', '.local/state') / 'logs'


def get_config_file_path() -> Path:
    """Default location of config.toml (not created automatically)."""
    return get_config_dir() / 'config.toml'
