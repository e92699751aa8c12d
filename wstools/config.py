"""wstools configuration management."""

import json
import logging
import os
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from .xdg import get_xdg_config_path

logger = logging.getLogger(__name__)

WORKSPACE_ROOT_ENV = "WSTOOLS_WORKSPACE_ROOT"


class Config(BaseModel):
    """wstools configuration."""

    model_config = ConfigDict(
        extra="allow",
        str_strip_whitespace=True,
    )

    workspace_root: Optional[Path] = None
    host: str = "127.0.0.1"
    port: int = 3333


def get_config_path() -> Path:
    return get_xdg_config_path("config.json")


def load_config(path: Optional[Path] = None) -> Config:
    """Load wstools configuration from JSON file.

    Args:
        path: Path to config.json file. If None, uses default path

    Returns:
        Config object with loaded settings. Returns default config if the file
        doesn't exist or can't be parsed.
    """
    if path is None:
        path = get_config_path()

    if not path.exists():
        return Config()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return Config.model_validate(data)
    except json.JSONDecodeError as e:
        logger.warning("Failed to parse config at %s: %s", path, e)
        return Config()
    except (OSError, ValidationError) as e:
        logger.warning("Failed to load config from %s: %s", path, e)
        return Config()


def resolve_workspace_root(
    override: Optional[Union[str, Path]] = None,
    config: Optional[Config] = None,
) -> Path:
    """Determine the workspace root for this process.

    Precedence: explicit override, $WSTOOLS_WORKSPACE_ROOT, the config file's
    ``workspace_root``, then the current working directory.

    Args:
        override: Root passed on the command line, if any
        config: Loaded configuration. If None, loads from the default path

    Returns:
        Absolute path with symlinks resolved

    Raises:
        ValueError: If the chosen root is not an existing directory
    """
    candidate: Optional[Union[str, Path]] = override
    if candidate is None:
        candidate = os.environ.get(WORKSPACE_ROOT_ENV) or None
    if candidate is None:
        if config is None:
            config = load_config()
        candidate = config.workspace_root
    if candidate is None:
        candidate = Path.cwd()

    root = Path(candidate).expanduser().resolve()
    if not root.is_dir():
        raise ValueError(f"Workspace root is not a directory: {root}")
    return root
