"""Tests for release tasks."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import Mock, patch

import pytest
from invoke.context import Context

from packnga.config.schema import PackngaConfig, PublishConfig, ReleaseConfig
from packnga.package import PackageSpec
from packnga.tasks.document_task import DocumentTask
from packnga.tasks.release_task import ReleaseTask
from packnga.utils.core.exceptions import ConfigurationError

INDEX_HTML = """<html>
<body>
<p>The latest release is 1.2.2 (2024-01-10).</p>
<a href="mylib-1-2-2.tar.gz">download</a>
</body>
</html>
"""


@pytest.fixture
def release_task(package_spec: PackageSpec, tmp_path: Path) -> ReleaseTask:
    def configure(task: ReleaseTask) -> None:
        task.base_dir = tmp_path / "doc"
        task.index_html_dir = tmp_path / "doc" / "html"

    return ReleaseTask(package_spec, configure=configure)


def write_index_files(index_html_dir: Path) -> None:
    index_html_dir.mkdir(parents=True)
    _ = (index_html_dir / "index.html").write_text(INDEX_HTML, encoding="utf-8")
    _ = (index_html_dir / "index.html.ja").write_text(INDEX_HTML, encoding="utf-8")


class TestInfoUpdate:
    """Test the info.update task."""

    def test_update(self, release_task: ReleaseTask, tmp_path: Path) -> None:
        """Test that version and date are replaced in every index page."""
        index_html_dir = tmp_path / "doc" / "html"
        write_index_files(index_html_dir)
        release_task.environ = {
            "OLD_VERSION": "1.2.2",
            "OLD_RELEASE_DATE": "2024-01-10",
            "RELEASE_DATE": "2024-03-01",
        }

        release_task.collection["info.update"](Context())

        for name in ("index.html", "index.html.ja"):
            content = (index_html_dir / name).read_text(encoding="utf-8")
            assert "The latest release is 1.2.3 (2024-03-01)." in content
            assert "mylib-1-2-3.tar.gz" in content

    def test_missing_environment(self, release_task: ReleaseTask, tmp_path: Path) -> None:
        """Test that nothing is written without the old release information."""
        index_html_dir = tmp_path / "doc" / "html"
        write_index_files(index_html_dir)
        release_task.environ = {"OLD_VERSION": "1.2.2"}

        with pytest.raises(ConfigurationError, match="OLD_RELEASE_DATE"):
            release_task.collection["info.update"](Context())

        assert (index_html_dir / "index.html").read_text(encoding="utf-8") == INDEX_HTML


class TestTag:
    """Test the tag task."""

    def test_tag(self, release_task: ReleaseTask) -> None:
        """Test the git tag command."""
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = Mock(returncode=0)

            release_task.collection["tag"](Context())

            assert mock_run.call_args.args[0] == [
                "git",
                "tag",
                "-a",
                "1.2.3",
                "-m",
                "release 1.2.3!!!",
            ]

    def test_configured_message(self, package_spec: PackageSpec) -> None:
        """Test that the tag message comes from configuration."""
        config = PackngaConfig(release=ReleaseConfig(tag_message="Version {version}"))
        release_task = ReleaseTask(package_spec, config)

        with patch("subprocess.run") as mock_run:
            mock_run.return_value = Mock(returncode=0)

            release_task.tag()

            assert mock_run.call_args.args[0][-1] == "Version 1.2.3"


class TestPublish:
    """Test the publish tasks."""

    def test_html_publish(self, release_task: ReleaseTask, tmp_path: Path) -> None:
        """Test that the whole web site tree goes to the document root."""
        with patch.object(release_task, "rsync_to_host") as mock_rsync:
            release_task.collection["html.publish"](Context())

            mock_rsync.assert_called_once_with(
                release_task.spec, f"{tmp_path / 'doc' / 'html'}/", "", {}
            )

    def test_reference_publish(self, release_task: ReleaseTask, tmp_path: Path) -> None:
        """Test that the reference goes below the package directory."""
        with patch.object(release_task, "rsync_to_host") as mock_rsync:
            release_task.collection["reference.publish"](Context())

            mock_rsync.assert_called_once_with(
                release_task.spec, f"{tmp_path / 'doc' / 'html' / 'mylib'}/", "mylib", {}
            )

    def test_reference_publish_prepares_first(self, package_spec: PackageSpec) -> None:
        """Test that the upload depends on preparing the publication."""
        document_task = DocumentTask(package_spec)
        prepare_task = document_task.reference_task.prepare_task

        release_task = ReleaseTask(package_spec, document_task=document_task)

        assert prepare_task is not None
        assert release_task.collection["reference.publish"].pre == [prepare_task]

    def test_rsync_command(self, release_task: ReleaseTask, tmp_path: Path) -> None:
        """Test the rsync command of an upload."""
        release_task.publish_config = PublishConfig(
            host="web.example.org", username="alice", remote_dir="/var/www/mylib"
        )

        with patch("subprocess.run") as mock_run:
            mock_run.return_value = Mock(returncode=0)

            release_task.publish_html()

            assert mock_run.call_args.args[0] == [
                "rsync",
                "-av",
                "--chmod=ug+w",
                "--exclude",
                "*.erb",
                f"{tmp_path / 'doc' / 'html'}/",
                "alice@web.example.org:/var/www/mylib/",
            ]

    def test_publish_config_loaded_lazily(self, release_task: ReleaseTask) -> None:
        """Test that the per-user configuration is read on first upload."""
        publish_config = PublishConfig(
            host="web.example.org", username="alice", remote_dir="/var/www"
        )

        with (
            patch(
                "packnga.tasks.release_task.ConfigManager.load_publish_config",
                return_value=publish_config,
            ) as mock_load,
            patch("subprocess.run") as mock_run,
        ):
            mock_run.return_value = Mock(returncode=0)

            release_task.publish_reference()
            release_task.publish_reference()

            mock_load.assert_called_once_with()
            assert mock_run.call_count == 2


class TestDocumentTaskSettings:
    """Test settings shared with the document task."""

    def test_languages_from_document_task(
        self, package_spec: PackageSpec, tmp_path: Path
    ) -> None:
        """Test that index files follow the document task's languages."""

        def configure(task: DocumentTask) -> None:
            task.base_dir = tmp_path / "doc"
            task.translate_language = "fr"

        document_task = DocumentTask(package_spec, configure=configure)

        release_task = ReleaseTask(package_spec, document_task=document_task)

        assert release_task.translate_languages == ["fr"]
        assert release_task.html_reference_dir == tmp_path / "doc" / "html" / "mylib"
        assert release_task.index_files() == [
            Path("doc/html/index.html"),
            Path("doc/html/index.html.fr"),
        ]

    def test_info_update_with_document_languages(
        self, package_spec: PackageSpec, tmp_path: Path
    ) -> None:
        """Test that only the document task's index files are required."""
        index_html_dir = tmp_path / "doc" / "html"
        index_html_dir.mkdir(parents=True)
        _ = (index_html_dir / "index.html").write_text(INDEX_HTML, encoding="utf-8")
        _ = (index_html_dir / "index.html.fr").write_text(INDEX_HTML, encoding="utf-8")

        def configure_document(task: DocumentTask) -> None:
            task.translate_language = "fr"

        def configure_release(task: ReleaseTask) -> None:
            task.index_html_dir = index_html_dir
            task.environ = {"OLD_VERSION": "1.2.2", "OLD_RELEASE_DATE": "2024-01-10"}

        document_task = DocumentTask(package_spec, configure=configure_document)
        release_task = ReleaseTask(
            package_spec, configure=configure_release, document_task=document_task
        )

        release_task.collection["info.update"](Context())

        assert "1.2.3" in (index_html_dir / "index.html.fr").read_text(encoding="utf-8")
        assert not (index_html_dir / "index.html.ja").exists()
