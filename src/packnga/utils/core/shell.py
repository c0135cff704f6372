"""
Helpers for running external tools.

Every operation of the task library ends up here: the documentation
generator, xml2po, msginit, git and rsync are all executed through
``run_command`` with a list argv.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Iterable
from pathlib import Path
from typing import IO

from .exceptions import CommandError

logger = logging.getLogger(__name__)


def run_command(
    command: list[str],
    stdout: IO[str] | None = None,
) -> None:
    """
    Run an external command and fail loudly if it does not succeed.

    Args:
        command: Command as list of strings
        stdout: Open text file receiving the command's standard output

    Raises:
        CommandError: If the command exits non-zero or is not installed
    """
    logger.info(shlex.join(command))

    try:
        if stdout is None:
            _ = subprocess.run(
                command,
                capture_output=True,
                text=True,
                check=True,
            )
        else:
            _ = subprocess.run(
                command,
                stdout=stdout,
                stderr=subprocess.PIPE,
                text=True,
                check=True,
            )
    except subprocess.CalledProcessError as e:
        stderr: str | None = e.stderr  # pyright: ignore[reportAny]
        logger.error(f"Command failed ({e.returncode}): {shlex.join(command)}: {stderr}")
        raise CommandError(
            f"Command failed with exit code {e.returncode}: {shlex.join(command)}",
            command=command,
            returncode=e.returncode,
            stderr=stderr,
        ) from e
    except FileNotFoundError as e:
        logger.error(f"{command[0]} command not found. Install it to run this task.")
        raise CommandError(
            f"Command not found: {command[0]}",
            command=command,
        ) from e


def needs_update(target: Path, sources: Iterable[Path]) -> bool:
    """
    Check if a generated file is stale.

    Args:
        target: Path of the generated file
        sources: Paths the target is generated from

    Returns:
        True if the target is missing or older than any existing source
    """
    if not target.exists():
        return True

    target_mtime = target.stat().st_mtime
    for source in sources:
        try:
            if source.stat().st_mtime > target_mtime:
                return True
        except OSError as e:
            logger.warning(f"Error checking file time for {source}: {e}")
            return True

    return False
