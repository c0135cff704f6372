"""
Package descriptor used by every task definition.

The descriptor carries the handful of package facts the tasks need (name,
version, homepage, file list and README path). It is normally read from the
``[project]`` table of ``pyproject.toml``.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .utils.core.exceptions import ConfigurationError, MissingFileError

logger = logging.getLogger(__name__)

EXCLUDED_DIRS = {
    "__pycache__",
    ".git",
    ".pytest_cache",
    "build",
    "dist",
    "doc",
    "tests",
    "venv",
    ".venv",
}


class PackageSpec(BaseModel):
    """Read-only description of the package being documented and released."""

    name: str = Field(
        ...,
        description="Distribution name, also used for the published directory",
        min_length=1,
    )
    version: str = Field(
        ...,
        description="Current package version",
        min_length=1,
    )
    homepage: str = Field(
        default="",
        description="Base URL of the project web site",
    )
    files: list[str] = Field(
        default_factory=list,
        description="Files belonging to the package, relative to the project root",
    )
    readme: str | None = Field(
        default=None,
        description="Path of the README file",
    )

    model_config: ClassVar[ConfigDict] = ConfigDict(
        str_strip_whitespace=True,
        frozen=True,
        extra="forbid",
    )

    @field_validator("homepage")
    @classmethod
    def normalize_homepage(cls, v: str) -> str:
        """Make sure a non-empty homepage ends with a slash."""
        if v and not v.endswith("/"):
            return v + "/"
        return v

    def source_files(self) -> list[str]:
        """Python source files of the package."""
        return [file for file in self.files if file.endswith(".py")]

    @classmethod
    def from_pyproject(cls, pyproject_path: Path) -> PackageSpec:
        """
        Build a package descriptor from ``pyproject.toml``.

        Args:
            pyproject_path: Path to the pyproject.toml file

        Returns:
            PackageSpec for the project

        Raises:
            MissingFileError: If pyproject.toml doesn't exist
            ConfigurationError: If the [project] table lacks name or version
        """
        if not pyproject_path.exists():
            raise MissingFileError(pyproject_path)

        with pyproject_path.open("rb") as f:
            data = tomllib.load(f)

        project: dict[str, object] = data.get("project", {})
        name = project.get("name")
        version = project.get("version")
        if not isinstance(name, str) or not isinstance(version, str):
            raise ConfigurationError(
                f"[project] name and version must be set in {pyproject_path}",
                context=pyproject_path,
            )

        urls = project.get("urls", {})
        homepage = ""
        if isinstance(urls, dict):
            homepage = str(urls.get("Homepage", ""))  # pyright: ignore[reportUnknownMemberType,reportUnknownArgumentType]

        readme = project.get("readme")
        if isinstance(readme, dict):
            readme = readme.get("file")  # pyright: ignore[reportUnknownMemberType,reportUnknownVariableType]

        root = pyproject_path.parent
        files = find_source_files(root)
        logger.debug(f"Found {len(files)} source file(s) for {name}")

        return cls(
            name=name,
            version=version,
            homepage=homepage,
            files=files,
            readme=readme if isinstance(readme, str) else None,
        )


def find_source_files(root: Path) -> list[str]:
    """
    Find the Python sources of a project.

    Looks under ``src/`` when the project uses a src layout, otherwise under
    the project root, skipping tests, docs and tool directories.

    Args:
        root: Project root directory

    Returns:
        Sorted list of paths relative to the project root
    """
    search_dir = root / "src" if (root / "src").is_dir() else root

    files: list[str] = []
    for path in search_dir.rglob("*.py"):
        relative_path = path.relative_to(root)
        if any(part in EXCLUDED_DIRS for part in relative_path.parts):
            continue
        files.append(relative_path.as_posix())

    return sorted(files)
