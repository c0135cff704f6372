"""Uploading the web site tree with rsync."""

from __future__ import annotations

import logging

from ..config.schema import PublishConfig
from ..package import PackageSpec
from ..utils.core.shell import run_command

logger = logging.getLogger(__name__)

RSYNC_COMMAND = "rsync"


def build_rsync_command(
    config: PublishConfig,
    source: str,
    destination: str,
    delete: bool = False,
) -> list[str]:
    """
    Build the rsync argv for one upload.

    Args:
        config: Remote host configuration
        source: Local directory, with a trailing slash to copy its contents
        destination: Path below the remote document root, empty for the root
        delete: Delete remote files that don't exist locally
    """
    command = [RSYNC_COMMAND, "-av", "--chmod=ug+w"]
    for pattern in config.exclude:
        command.extend(["--exclude", pattern])
    if delete or config.delete:
        command.append("--delete")
    if config.dry_run:
        command.append("--dry-run")
    command.append(source)
    command.append(f"{config.username}@{config.host}:{config.remote_dir}{destination}")
    return command


def rsync_to_host(
    package: PackageSpec,
    config: PublishConfig,
    source: str,
    destination: str,
    delete: bool = False,
) -> None:
    """Upload ``source`` to ``destination`` on the project web server."""
    logger.info(f"Publishing {package.name} {source} to {config.host}:{config.remote_dir}{destination}")
    run_command(build_rsync_command(config, source, destination, delete=delete))
