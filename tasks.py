"""invoke tasks of packnga itself."""

from pathlib import Path

from invoke import Collection

import packnga

packnga.setup_logging()

spec = packnga.PackageSpec.from_pyproject(Path("pyproject.toml"))
config = packnga.ConfigManager.load_config()

document_task = packnga.DocumentTask(spec, config)
release_task = packnga.ReleaseTask(spec, config, document_task=document_task)

ns = Collection(document_task.collection, release_task.collection)
