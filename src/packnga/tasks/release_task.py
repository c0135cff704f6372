"""
Release tasks.

Release tasks update version and release date in the web site index pages,
tag the current revision and upload the web site.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Self

from invoke.collection import Collection
from invoke.context import Context
from invoke.tasks import Task

from ..config.manager import ConfigManager
from ..config.schema import PackngaConfig, PublishConfig
from ..package import PackageSpec
from ..publication.release_info import ReleaseInfo, update_index_files
from ..publication.rsync import rsync_to_host
from ..utils.core.shell import run_command
from .base import TaskBody, define_task
from .document_task import DocumentTask

logger = logging.getLogger(__name__)


class ReleaseTask:
    """
    Defines tasks for preparing and publishing a release.

    Args:
        spec: Package descriptor
        config: Project configuration supplying defaults
        configure: Called with the task object before tasks are defined
        document_task: Document task whose base directory and target
            languages are shared, and whose ``publication.prepare`` task runs
            before the reference upload
    """

    def __init__(
        self,
        spec: PackageSpec,
        config: PackngaConfig | None = None,
        configure: Callable[[Self], None] | None = None,
        document_task: DocumentTask | None = None,
    ) -> None:
        config = config or PackngaConfig()
        self.spec: PackageSpec = spec
        self.base_dir: Path = Path(config.reference.base_dir)
        self.index_html_dir: Path = Path(config.release.index_html_dir)
        self.translate_languages: list[str] = list(config.reference.translate_languages)
        self.tag_message: str = config.release.tag_message
        self.publish_config: PublishConfig | None = config.publish
        self.publication_task: Task[TaskBody] | None = None
        self.environ: Mapping[str, str] = os.environ
        if document_task is not None:
            reference_task = document_task.reference_task
            self.base_dir = reference_task.base_dir
            self.translate_languages = list(reference_task.translate_languages)
            self.publication_task = reference_task.prepare_task
        if configure is not None:
            configure(self)
        self.collection: Collection = self.define()

    @property
    def html_base_dir(self) -> Path:
        return self.base_dir / "html"

    @property
    def html_reference_dir(self) -> Path:
        return self.html_base_dir / self.spec.name

    def index_files(self) -> list[Path]:
        """Index pages carrying the version and release date."""
        index_html_dir = Path(self.index_html_dir)
        return [index_html_dir / "index.html"] + [
            index_html_dir / f"index.html.{language}" for language in self.translate_languages
        ]

    def update_info(self) -> list[Path]:
        """Replace version and release date in the index pages."""
        info = ReleaseInfo.from_environ(self.environ, self.spec)
        logger.info(
            f"Updating release information: {info.old_version} -> {info.new_version}, "
            f"{info.old_release_date} -> {info.new_release_date}"
        )
        return update_index_files(self.index_files(), info)

    def tag(self) -> None:
        """Tag the current revision with the package version."""
        message = self.tag_message.format(version=self.spec.version)
        run_command(["git", "tag", "-a", self.spec.version, "-m", message])

    def rsync_to_host(
        self,
        spec: PackageSpec,
        source: str,
        destination: str,
        options: Mapping[str, bool] | None = None,
    ) -> None:
        """Upload ``source`` to the project web server."""
        options = options or {}
        if self.publish_config is None:
            self.publish_config = ConfigManager.load_publish_config()
        rsync_to_host(
            spec,
            self.publish_config,
            source,
            destination,
            delete=options.get("delete", False),
        )

    def publish_html(self) -> None:
        self.rsync_to_host(self.spec, f"{self.html_base_dir}/", "", {})

    def publish_reference(self) -> None:
        self.rsync_to_host(self.spec, f"{self.html_reference_dir}/", self.spec.name, {})

    def define(self) -> Collection:
        """Build the ``release`` namespace."""
        release = Collection("release")

        info = Collection("info")

        def update(c: Context) -> None:
            _ = self.update_info()

        info.add_task(define_task(update, "update", "Update version in index HTML."))
        release.add_collection(info)

        def tag(c: Context) -> None:
            self.tag()

        release.add_task(define_task(tag, "tag", "Tag the current revision."))

        html = Collection("html")

        def publish_html(c: Context) -> None:
            self.publish_html()

        html.add_task(define_task(publish_html, "publish", "Publish HTML to Web site."))
        release.add_collection(html)

        reference = Collection("reference")

        def publish_reference(c: Context) -> None:
            self.publish_reference()

        pre = [self.publication_task] if self.publication_task is not None else None
        reference.add_task(
            define_task(
                publish_reference, "publish", "Upload document to Web site.", pre=pre
            )
        )
        release.add_collection(reference)

        return release
