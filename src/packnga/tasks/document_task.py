"""
Document tasks.

``DocumentTask`` groups API reference generation with its translation and
publication under one ``reference`` namespace. Paths and languages set on the
document task are handed down to both sub-tasks.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Self

from invoke.collection import Collection

from ..config.schema import PackngaConfig
from ..package import PackageSpec
from .apidoc_task import ApiDocTask
from .reference_task import ReferenceTask

logger = logging.getLogger(__name__)


class DocumentTask:
    """
    Defines tasks for generating, translating and publishing references.

    Args:
        spec: Package descriptor
        config: Project configuration supplying defaults
        configure: Called with the task object before tasks are defined

    Usage Examples:
        In tasks.py:
            >>> spec = PackageSpec.from_pyproject(Path("pyproject.toml"))
            >>> document_task = DocumentTask(spec, configure=lambda t: setattr(t, "base_dir", "doc"))
            >>> ns = Collection(document_task.collection)
    """

    def __init__(
        self,
        spec: PackageSpec,
        config: PackngaConfig | None = None,
        configure: Callable[[Self], None] | None = None,
    ) -> None:
        config = config or PackngaConfig()
        self.spec: PackageSpec = spec
        self.base_dir: Path | str = config.reference.base_dir
        self.original_language: str = config.reference.original_language
        self.translate_languages: list[str] = list(config.reference.translate_languages)
        self.apidoc_task: ApiDocTask = ApiDocTask(spec)
        self.reference_task: ReferenceTask = ReferenceTask(spec)
        self.reference_task.apidoc_task = self.apidoc_task
        if configure is not None:
            configure(self)
        self._propagate()
        self.collection: Collection = self.define()

    @property
    def translate_language(self) -> str:
        return self.translate_languages[0]

    @translate_language.setter
    def translate_language(self, language: str) -> None:
        """Translate to a single language."""
        self.translate_languages = [language]

    def _propagate(self) -> None:
        base_dir = Path(self.base_dir)
        languages = [
            language
            for language in dict.fromkeys(self.translate_languages)
            if language != self.original_language
        ]

        self.apidoc_task.base_dir = base_dir
        self.apidoc_task.original_language = self.original_language
        self.reference_task.base_dir = base_dir
        self.reference_task.original_language = self.original_language
        self.reference_task.translate_languages = languages

    def apidoc(self, hook: Callable[[ApiDocTask], None] | None = None) -> ApiDocTask:
        """Customize API reference generation."""
        self._propagate()
        if hook is not None:
            hook(self.apidoc_task)
        return self.apidoc_task

    def reference(
        self, hook: Callable[[ReferenceTask], None] | None = None
    ) -> ReferenceTask:
        """Customize reference translation and publication."""
        self._propagate()
        if hook is not None:
            hook(self.reference_task)
        return self.reference_task

    def define(self) -> Collection:
        """Build the ``reference`` namespace."""
        reference = Collection("reference")
        self.apidoc_task.define(reference)
        self.reference_task.define(reference)
        logger.debug(
            f"Defined reference tasks for {self.spec.name} "
            f"({self.original_language} -> {', '.join(self.reference_task.translate_languages) or 'none'})"
        )
        return reference
