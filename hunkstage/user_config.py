"""Repository configuration management for hunkstage.

Handles reading and writing the .hunkstage/config.yaml file in each repository.
"""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from hunkstage.compose.models import StagingStrategy
from hunkstage.git import DEFAULT_CONTEXT_LINES, DEFAULT_DIFF_EXCLUDE_PATTERNS, DiffStrategy

logger = logging.getLogger(__name__)


# Default configuration values
DEFAULT_CONFIG = {
    "context_lines": DEFAULT_CONTEXT_LINES,
    "diff_strategy": DiffStrategy.WORKDIR.value,
    "staging_strategy": StagingStrategy.HUNKS.value,
    "rollback_on_failure": False,
    "strict_matching": False,
    "ignore": list(DEFAULT_DIFF_EXCLUDE_PATTERNS) + [".hunkstage/*"],
}


class RepoConfig(BaseModel):
    """Validated repository configuration."""

    context_lines: int = DEFAULT_CONTEXT_LINES
    diff_strategy: DiffStrategy = DiffStrategy.WORKDIR
    staging_strategy: StagingStrategy = StagingStrategy.HUNKS
    rollback_on_failure: bool = False
    strict_matching: bool = False
    ignore: list[str] = []

    @field_validator("context_lines")
    @classmethod
    def context_lines_not_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("context_lines must not be negative")
        return v


def get_config_dir(repo_root: Path) -> Path:
    """Get the repository config directory.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        Path to .hunkstage/
    """
    return repo_root / ".hunkstage"


def get_config_file(repo_root: Path) -> Path:
    """Return path to the config.yaml file.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        Path to .hunkstage/config.yaml.
    """
    return get_config_dir(repo_root) / "config.yaml"


def load_config(repo_root: Path) -> RepoConfig:
    """Load the hunkstage configuration from config.yaml.

    Missing keys take their default values. A missing, unreadable or invalid
    file yields the defaults.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        The repository configuration.
    """
    config = dict(DEFAULT_CONFIG)
    config_file = get_config_file(repo_root)

    if not config_file.exists():
        return RepoConfig(**config)

    try:
        with open(config_file, "r") as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ValueError("top level must be a mapping")
        config.update(loaded)
        return RepoConfig(**config)
    except (OSError, yaml.YAMLError, ValueError, ValidationError) as e:
        # If config is corrupted, return defaults
        logger.warning("Ignoring invalid %s: %s", config_file, e)
        return RepoConfig(**DEFAULT_CONFIG)


def save_config(repo_root: Path, config: dict) -> None:
    """Save the configuration to config.yaml.

    Args:
        repo_root: The root directory of the git repository.
        config: Configuration dictionary to save.
    """
    config_dir = get_config_dir(repo_root)
    config_dir.mkdir(exist_ok=True)
    with open(get_config_file(repo_root), "w") as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)
