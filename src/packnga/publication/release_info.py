"""
Version and release date replacement in the web site index pages.

Usage Examples:
    >>> info = ReleaseInfo.from_environ(os.environ, spec)
    >>> update_index_files([Path("doc/html/index.html")], info)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date
from pathlib import Path
from typing import NamedTuple

from ..package import PackageSpec
from ..utils.core.exceptions import ConfigurationError, MissingFileError

logger = logging.getLogger(__name__)

RELEASE_DATE_FORMAT = "%Y-%m-%d"


class ReleaseInfo(NamedTuple):
    """Old and new version and release date of a release."""

    old_version: str
    new_version: str
    old_release_date: str
    new_release_date: str

    @classmethod
    def from_environ(
        cls,
        environ: Mapping[str, str],
        package: PackageSpec,
        today: date | None = None,
    ) -> ReleaseInfo:
        """
        Read the release overrides from environment variables.

        ``OLD_VERSION`` and ``OLD_RELEASE_DATE`` are required. ``VERSION``
        defaults to the package version and ``RELEASE_DATE`` to today.

        Raises:
            ConfigurationError: Naming every missing required variable
        """
        old_version = environ.get("OLD_VERSION")
        old_release_date = environ.get("OLD_RELEASE_DATE")

        empty_options: list[str] = []
        if not old_version:
            empty_options.append("OLD_VERSION")
        if not old_release_date:
            empty_options.append("OLD_RELEASE_DATE")
        if empty_options or old_version is None or old_release_date is None:
            raise ConfigurationError(
                f"Specify option(s) of {', '.join(empty_options)}.",
                context=empty_options,
            )

        today = today or date.today()
        return cls(
            old_version=old_version,
            new_version=environ.get("VERSION") or package.version,
            old_release_date=old_release_date,
            new_release_date=environ.get("RELEASE_DATE") or today.strftime(RELEASE_DATE_FORMAT),
        )

    def replacements(self) -> list[tuple[str, str]]:
        """Old/new string pairs, including dash variants of dotted values."""
        pairs: list[tuple[str, str]] = []
        for old, new in (
            (self.old_version, self.new_version),
            (self.old_release_date, self.new_release_date),
        ):
            pairs.append((old, new))
            if "." in old:
                pairs.append((old.replace(".", "-"), new.replace(".", "-")))
        return pairs


def replace_release_info(content: str, info: ReleaseInfo) -> str:
    """Replace every old version and date in ``content``."""
    for old, new in info.replacements():
        content = content.replace(old, new)
    return content


def update_index_files(index_files: list[Path], info: ReleaseInfo) -> list[Path]:
    """
    Write the new version and release date into index pages.

    All files are checked before the first one is written.

    Args:
        index_files: Index pages to update
        info: Old and new release information

    Returns:
        Files whose content changed

    Raises:
        MissingFileError: If an index page doesn't exist
    """
    for index_file in index_files:
        if not index_file.exists():
            raise MissingFileError(index_file, f"Index file does not exist: {index_file}")

    updated: list[Path] = []
    for index_file in index_files:
        content = index_file.read_text(encoding="utf-8")
        replaced_content = replace_release_info(content, info)
        if replaced_content == content:
            logger.debug(f"No release information to update in {index_file}")
            continue

        _ = index_file.write_text(replaced_content, encoding="utf-8")
        updated.append(index_file)
        logger.info(f"Updated release information in {index_file}")

    return updated
