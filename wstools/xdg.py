"""XDG Base Directory utilities for config file management."""

import os
from pathlib import Path

APP_DIR_NAME = "wstools"


def get_xdg_config_dir() -> Path:
    """Directory holding wstools config files.

    ``$XDG_CONFIG_HOME/wstools`` when XDG_CONFIG_HOME is set to an absolute
    path, otherwise ``~/.config/wstools``.
    """
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    # A relative XDG_CONFIG_HOME is ignored
    if xdg_config and os.path.isabs(xdg_config):
        return Path(xdg_config) / APP_DIR_NAME
    return Path.home() / ".config" / APP_DIR_NAME


def get_xdg_config_path(filename: str) -> Path:
    return get_xdg_config_dir() / filename
