"""Centralized path management for docsmith.

A single source of truth for the configuration and output locations, so
commands behave the same regardless of the current working directory.
"""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path


def _get_project_root() -> Path:
    """Project root: DOCSMITH_HOME when set, else the current directory."""
    override = os.environ.get("DOCSMITH_HOME")
    if override:
        return Path(override).expanduser()
    return Path.cwd()


@dataclass
class ProjectPaths:
    """Container for all project-related paths.

    All paths are computed relative to the project root.
    """

    root: Path = field(default_factory=_get_project_root)

    def __post_init__(self) -> None:
        self.root = self.root.resolve()

    # --- Configuration paths ---
    @property
    def config(self) -> Path:
        """Configuration directory (config/)."""
        return self.root / "config"

    @property
    def company_profile(self) -> Path:
        """Letterhead and output settings TOML file."""
        return self.config / "company.toml"

    # --- Output paths ---
    @property
    def exports(self) -> Path:
        """Directory exported PDFs are saved to."""
        return self.root / "exports"

    def ensure_export_directory(self) -> Path:
        self.exports.mkdir(parents=True, exist_ok=True)
        return self.exports


# Module-level singleton and temporary directory
_paths: ProjectPaths | None = None
_tmpdir = tempfile.TemporaryDirectory()
TMPDIR = Path(_tmpdir.name)


def get_paths() -> ProjectPaths:
    """Get the singleton ProjectPaths instance.

    Returns:
        The global ProjectPaths instance.
    """
    global _paths
    if _paths is None:
        _paths = ProjectPaths()
    return _paths


def reset_paths() -> None:
    """Forget the cached paths so the next get_paths() re-reads DOCSMITH_HOME."""
    global _paths
    _paths = None
