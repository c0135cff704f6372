"""
API reference generation task.

The reference of the original language is generated by an external
documentation generator (pdoc by default) into ``<base>/reference/<lang>``.
"""

from __future__ import annotations

import logging
import re
import shutil
from collections.abc import Callable
from pathlib import Path, PurePosixPath

from invoke.collection import Collection
from invoke.context import Context

from ..package import PackageSpec
from ..utils.core.shell import needs_update, run_command
from .base import define_task

logger = logging.getLogger(__name__)

CommandHook = Callable[[list[str]], None]


def strip_footer(html: str, footer_pattern: str) -> str:
    """Remove every match of the generator's footer markup from a page."""
    return re.sub(footer_pattern, "", html, flags=re.DOTALL)


class ApiDocTask:
    """
    Defines tasks generating the API reference.

    ``before_define`` hooks receive the generator argv and may change it in
    place before each run.

    ``footer_pattern`` names markup removed from every generated page, such
    as a generation timestamp that would churn the message catalogs. pdoc
    pages carry none, so nothing is removed by default.
    """

    def __init__(self, spec: PackageSpec) -> None:
        self.spec: PackageSpec = spec
        self.base_dir: Path = Path("doc")
        self.original_language: str = "en"
        self.readme: str | None = spec.readme
        self.source_files: list[str] | None = None
        self.options: list[str] = []
        self.command: str = "pdoc"
        self.docformat: str = "google"
        self.footer_pattern: str | None = None
        self._hooks: list[CommandHook] = []

    def before_define(self, hook: CommandHook) -> None:
        """Register a hook customizing the generator command."""
        self._hooks.append(hook)

    @property
    def reference_dir(self) -> Path:
        return self.base_dir / "reference"

    @property
    def output_dir(self) -> Path:
        return self.reference_dir / self.original_language

    def target_sources(self) -> list[str]:
        """Top-level modules and packages handed to the generator."""
        files = self.source_files if self.source_files is not None else self.spec.source_files()

        targets: list[str] = []
        for file in files:
            path = PurePosixPath(file)
            parts = path.parts
            if parts and parts[0] == "src":
                parts = parts[1:]
                prefix = PurePosixPath("src")
            else:
                prefix = PurePosixPath()
            if not parts:
                continue
            target = str(prefix / parts[0])
            if target not in targets:
                targets.append(target)
        return targets

    def build_command(self) -> list[str]:
        """Build the generator argv."""
        command = [
            self.command,
            "--output-directory",
            str(self.output_dir),
            "--docformat",
            self.docformat,
            *self.options,
            *self.target_sources(),
        ]
        for hook in self._hooks:
            hook(command)
        return command

    def is_outdated(self) -> bool:
        """Whether any source or the README is newer than the generated index."""
        files = self.source_files if self.source_files is not None else self.spec.source_files()
        sources = [Path(file) for file in files]
        if self.readme:
            sources.append(Path(self.readme))
        return needs_update(self.output_dir / "index.html", sources)

    def generate(self) -> None:
        """Run the generator and tidy the generated pages."""
        run_command(self.build_command())
        if self.footer_pattern is None:
            return

        page_count = 0
        for path in sorted(self.output_dir.rglob("*.html")):
            html = path.read_text(encoding="utf-8")
            stripped = strip_footer(html, self.footer_pattern)
            if stripped != html:
                _ = path.write_text(stripped, encoding="utf-8")
                page_count += 1
        logger.debug(f"Removed generator footer from {page_count} page(s)")

    def clean(self) -> None:
        """Remove every generated reference."""
        if self.reference_dir.exists():
            shutil.rmtree(self.reference_dir)
            logger.info(f"Removed {self.reference_dir}")

    def define(self, namespace: Collection) -> None:
        """Add the generation tasks to ``namespace``."""

        def generate(c: Context, force: bool = False) -> None:
            if not force and not self.is_outdated():
                logger.info(f"API reference is up to date: {self.output_dir}")
                return
            self.generate()

        def clean(c: Context) -> None:
            self.clean()

        namespace.add_task(
            define_task(generate, "generate", "Generates API reference.")
        )
        namespace.add_task(
            define_task(clean, "clean", "Removes generated API references.")
        )
