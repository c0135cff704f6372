"""
Reference translation and publication tasks.

Defined tasks, under the ``reference`` namespace:

- ``pot.generate``: extract messages of the original HTML reference
- ``po.<lang>.update`` / ``po.update``: merge messages into .po files
- ``po.<lang>.stats``: report translation progress
- ``translate.<lang>`` / ``translate``: write translated references
- ``publication.prepare``: copy references into the web site tree
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Callable
from pathlib import Path

from invoke.collection import Collection
from invoke.context import Context
from invoke.tasks import Task

from ..package import PackageSpec
from ..publication.publisher import ALPHABETICAL_INDEX_FILE_NAME, ReferencePublisher
from ..utils.core.exceptions import MissingFileError
from ..utils.core.shell import needs_update
from ..utils.i18n.catalog import (
    CatalogStatistics,
    catalog_statistics,
    generate_pot,
    translate_html,
    update_po,
)
from .apidoc_task import ApiDocTask
from .base import TaskBody, define_task

logger = logging.getLogger(__name__)


class ReferenceTask:
    """Defines tasks translating and publishing the API reference."""

    def __init__(self, spec: PackageSpec) -> None:
        self.spec: PackageSpec = spec
        self.base_dir: Path = Path("doc")
        self.original_language: str = "en"
        self.translate_languages: list[str] = ["ja"]
        self.index_file_name: str | None = None
        self.published_index_name: str = ALPHABETICAL_INDEX_FILE_NAME
        self.list_file_pattern: str | None = None
        self.apidoc_task: ApiDocTask | None = None
        self.prepare_task: Task[TaskBody] | None = None

    @property
    def reference_base_dir(self) -> Path:
        return self.base_dir / "reference"

    @property
    def original_reference_dir(self) -> Path:
        return self.reference_base_dir / self.original_language

    @property
    def po_dir(self) -> Path:
        return self.base_dir / "po"

    @property
    def pot_file(self) -> Path:
        return self.po_dir / f"{self.spec.name}.pot"

    def po_file(self, language: str) -> Path:
        return self.po_dir / f"{language}.po"

    def html_files(self) -> list[Path]:
        """Generated HTML files of the original language."""
        return sorted(self.original_reference_dir.rglob("*.html"))

    def _require_html_files(self) -> list[Path]:
        html_files = self.html_files()
        if not html_files:
            raise MissingFileError(
                self.original_reference_dir,
                f"No generated HTML files in {self.original_reference_dir}",
            )
        return html_files

    def generate_pot(self, force: bool = False) -> bool:
        """
        Regenerate the .pot template when it is older than the HTML files.

        Returns:
            True if the template was written, False if it was up to date
        """
        html_files = self._require_html_files()
        if not force and not needs_update(self.pot_file, html_files):
            logger.debug(f"Skipping {self.pot_file} (up to date)")
            return False

        generate_pot(self.pot_file, html_files)
        return True

    def update_po(self, language: str) -> None:
        """Update the .po file of one language, creating it when needed."""
        po_file = self.po_file(language)
        if not po_file.exists():
            _ = self.generate_pot()
        update_po(po_file, self.pot_file, self._require_html_files(), language)

    def update_all_po(self) -> None:
        """Regenerate the original reference, then update every .po file."""
        if self.apidoc_task is not None:
            self.apidoc_task.clean()
            self.apidoc_task.generate()
        for language in self.translate_languages:
            self.update_po(language)

    def po_statistics(self, language: str) -> CatalogStatistics:
        """Log and return the translation progress of one language."""
        statistics = catalog_statistics(self.po_file(language))
        logger.info(
            f"{language}: {statistics.translated} translated, "
            f"{statistics.fuzzy} fuzzy, "
            f"{statistics.untranslated} untranslated "
            f"({statistics.percent_translated}% translated)"
        )
        return statistics

    def translate(self, language: str) -> None:
        """
        Write the reference of one target language.

        HTML files are translated with the language's .po file, every other
        file is copied with its permissions.
        """
        source_dir = self.original_reference_dir
        if not source_dir.is_dir():
            raise MissingFileError(source_dir, f"Reference directory does not exist: {source_dir}")

        po_file = self.po_file(language)
        translate_doc_dir = self.reference_base_dir / language

        for dirpath, dirnames, filenames in os.walk(source_dir):
            dirnames.sort()
            current_dir = Path(dirpath)
            translated_dir = translate_doc_dir / current_dir.relative_to(source_dir)
            _ = translated_dir.mkdir(parents=True, exist_ok=True)

            for filename in sorted(filenames):
                path = current_dir / filename
                translated_path = translated_dir / filename
                if path.suffix == ".html":
                    translate_html(path, translated_path, po_file, language)
                else:
                    _ = shutil.copy2(path, translated_path)

        logger.info(f"Translated reference to {language}: {translate_doc_dir}")

    def prepare_publication(self) -> None:
        """Copy every language's reference into the web site tree."""
        publisher = ReferencePublisher(
            self.spec,
            self.base_dir,
            self.original_language,
            self.translate_languages,
            index_file_name=self.index_file_name,
            published_index_name=self.published_index_name,
            list_file_pattern=self.list_file_pattern,
        )
        publisher.publish()

    def define(self, namespace: Collection) -> None:
        """Add the translation and publication tasks to ``namespace``."""
        namespace.add_collection(self._define_pot_tasks())
        namespace.add_collection(self._define_po_tasks())
        namespace.add_collection(self._define_translate_tasks())
        namespace.add_collection(self._define_publication_tasks())

    def _define_pot_tasks(self) -> Collection:
        pot = Collection("pot")

        def generate(c: Context, force: bool = False) -> None:
            _ = self.generate_pot(force=force)

        pot.add_task(define_task(generate, "generate", "Generates pot file."))
        return pot

    def _define_po_tasks(self) -> Collection:
        po = Collection("po")

        for language in self.translate_languages:
            language_namespace = Collection(language)
            language_namespace.add_task(
                self._language_task(
                    self.update_po, language, "update", f"Updates po file for {language}."
                )
            )
            language_namespace.add_task(
                self._language_task(
                    self.po_statistics,
                    language,
                    "stats",
                    f"Shows translation progress for {language}.",
                )
            )
            po.add_collection(language_namespace)

        def update_all(c: Context) -> None:
            self.update_all_po()

        po.add_task(define_task(update_all, "update", "Updates po files."))
        return po

    def _define_translate_tasks(self) -> Collection:
        translate = Collection("translate")

        for language in self.translate_languages:
            translate.add_task(
                self._language_task(
                    self.translate, language, language, f"Translates documents to {language}."
                )
            )

        def translate_all(c: Context) -> None:
            for language in self.translate_languages:
                self.translate(language)

        translate.add_task(
            define_task(translate_all, "all", "Translates references."),
            default=True,
        )
        return translate

    def _define_publication_tasks(self) -> Collection:
        publication = Collection("publication")

        def prepare(c: Context) -> None:
            self.prepare_publication()

        self.prepare_task = define_task(
            prepare, "prepare", "Prepares references for publication."
        )
        publication.add_task(self.prepare_task)
        return publication

    @staticmethod
    def _language_task(
        action: Callable[[str], object],
        language: str,
        name: str,
        description: str,
    ) -> Task[TaskBody]:
        def body(c: Context) -> None:
            _ = action(language)

        return define_task(body, name, description)
