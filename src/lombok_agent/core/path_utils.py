"""
Path resolution utilities for lombok-agent.

Locates the opencode data directory the jdtls integration shares, and the
cached lombok.jar beneath it. All resolvers accept the platform, environment
and home directory as arguments so they can be evaluated without touching
process-wide state.
"""

import ntpath
import os
import posixpath
import re
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

APP_NAME = "opencode"

# Base data directory override (XDG base directory convention)
XDG_DATA_HOME_ENV = "XDG_DATA_HOME"
# Roaming application data on Windows
APPDATA_ENV = "APPDATA"
# Opt-out for language server downloads
DISABLE_DOWNLOAD_ENV = "OPENCODE_DISABLE_LSP_DOWNLOAD"

_TRUTHY = re.compile(r"^(1|true|yes)$", re.IGNORECASE)


def _non_empty_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _default_home() -> str:
    return str(Path.home())


def opencode_data_dir(
    platform: Optional[str] = None,
    env: Optional[Mapping[str, Any]] = None,
    home: Any = None,
) -> str:
    """
    Resolve the opencode data directory.

    Precedence: ``XDG_DATA_HOME``, then the macOS and Windows conventions,
    then ``~/.local/share``. Non-string or empty values are ignored.

    Args:
        platform: ``sys.platform`` style identifier. Defaults to the running platform.
        env: Environment mapping. Defaults to ``os.environ``.
        home: Home directory. Defaults to the current user's home.

    Returns:
        Absolute path of the data directory as a string
    """
    platform = platform if platform is not None else sys.platform
    env = env if env is not None else os.environ
    resolved_home = _non_empty_str(home) or _default_home()

    xdg_data_home = _non_empty_str(env.get(XDG_DATA_HOME_ENV))
    if xdg_data_home:
        join = ntpath.join if platform == "win32" else posixpath.join
        return join(xdg_data_home, APP_NAME)

    if platform == "darwin":
        return posixpath.join(resolved_home, "Library", "Application Support", APP_NAME)

    if platform == "win32":
        app_data = _non_empty_str(env.get(APPDATA_ENV)) or ntpath.join(
            resolved_home, "AppData", "Roaming"
        )
        return ntpath.join(app_data, APP_NAME)

    return posixpath.join(resolved_home, ".local", "share", APP_NAME)


def lombok_jar_path(data_dir: Any = None) -> str:
    """
    Return where lombok.jar is cached, next to the jdtls install.

    Args:
        data_dir: Data directory. Empty or non-string values fall back to
                  opencode_data_dir().
    """
    resolved = _non_empty_str(data_dir) or opencode_data_dir()
    return os.path.join(resolved, "bin", "jdtls", "bin", "lombok.jar")


def is_lsp_download_disabled(env: Optional[Mapping[str, Any]] = None) -> bool:
    """Return True if OPENCODE_DISABLE_LSP_DOWNLOAD is set to 1, true or yes."""
    env = env if env is not None else os.environ
    value = env.get(DISABLE_DOWNLOAD_ENV)
    if not isinstance(value, str):
        return False
    return _TRUTHY.match(value.strip()) is not None


def ensure_directory_exists(path: Path) -> bool:
    """
    Ensure a directory exists, creating it if necessary.

    Creates the directory and all parent directories if they don't exist.

    Args:
        path: Path to the directory to ensure exists.

    Returns:
        True if the directory exists or was created successfully,
        False if creation failed (e.g., permission error or a malformed path).
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
        return True
    except (OSError, ValueError):
        return False
