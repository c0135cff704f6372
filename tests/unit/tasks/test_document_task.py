"""Tests for the aggregate document task."""

from __future__ import annotations

from pathlib import Path

from packnga.config.schema import PackngaConfig, ReferenceConfig
from packnga.package import PackageSpec
from packnga.tasks.apidoc_task import ApiDocTask
from packnga.tasks.document_task import DocumentTask
from packnga.tasks.reference_task import ReferenceTask


class TestDocumentTask:
    """Test the DocumentTask class."""

    def test_base_directory_set(self, package_spec: PackageSpec) -> None:
        """Test that base_dir reaches both sub-tasks."""
        base_dir = Path("base_directory")

        def configure(task: DocumentTask) -> None:
            task.base_dir = str(base_dir)

        document_task = DocumentTask(package_spec, configure=configure)

        seen: list[Path] = []

        def check_apidoc(apidoc_task: ApiDocTask) -> None:
            seen.append(apidoc_task.base_dir)

        def check_reference(reference_task: ReferenceTask) -> None:
            seen.append(reference_task.base_dir)

        _ = document_task.apidoc(check_apidoc)
        _ = document_task.reference(check_reference)

        assert seen == [base_dir, base_dir]

    def test_translate_language_set(self, package_spec: PackageSpec) -> None:
        """Test that a single translate language replaces the default."""

        def configure(task: DocumentTask) -> None:
            task.translate_language = "fr"

        document_task = DocumentTask(package_spec, configure=configure)

        assert document_task.reference_task.translate_languages == ["fr"]
        assert "po.fr.update" in document_task.collection.task_names
        assert "po.ja.update" not in document_task.collection.task_names

    def test_config_defaults(self, package_spec: PackageSpec) -> None:
        """Test that configuration supplies the defaults."""
        config = PackngaConfig(
            reference=ReferenceConfig(
                base_dir="docs", original_language="ja", translate_languages=["en"]
            )
        )

        document_task = DocumentTask(package_spec, config)

        assert document_task.apidoc_task.output_dir == Path("docs/reference/ja")
        assert document_task.reference_task.translate_languages == ["en"]

    def test_defined_tasks(self, package_spec: PackageSpec) -> None:
        """Test the names in the reference namespace."""
        document_task = DocumentTask(package_spec)

        assert document_task.collection.name == "reference"
        task_names = set(document_task.collection.task_names)
        assert {
            "generate",
            "clean",
            "pot.generate",
            "po.update",
            "po.ja.update",
            "po.ja.stats",
            "translate.ja",
            "translate.all",
            "publication.prepare",
        } <= task_names

    def test_reference_uses_apidoc_task(self, package_spec: PackageSpec) -> None:
        """Test that updating all .po files can regenerate the reference."""
        document_task = DocumentTask(package_spec)

        assert document_task.reference_task.apidoc_task is document_task.apidoc_task
        assert document_task.reference_task.prepare_task is not None
