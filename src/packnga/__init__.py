"""
packnga - invoke task definitions for documenting and releasing Python packages.

Usage Examples:
    In a project's tasks.py:
        >>> from pathlib import Path
        >>> from invoke import Collection
        >>> import packnga
        >>> spec = packnga.PackageSpec.from_pyproject(Path("pyproject.toml"))
        >>> document_task = packnga.DocumentTask(spec)
        >>> release_task = packnga.ReleaseTask(spec, document_task=document_task)
        >>> ns = Collection(document_task.collection, release_task.collection)
"""

from .config.manager import ConfigManager
from .config.schema import PackngaConfig
from .package import PackageSpec
from .tasks.apidoc_task import ApiDocTask
from .tasks.document_task import DocumentTask
from .tasks.reference_task import ReferenceTask
from .tasks.release_task import ReleaseTask
from .utils.core.exceptions import PackngaError
from .utils.core.logging_setup import setup_logging

__version__ = "1.0.0"

__all__ = [
    "ApiDocTask",
    "ConfigManager",
    "DocumentTask",
    "PackageSpec",
    "PackngaConfig",
    "PackngaError",
    "ReferenceTask",
    "ReleaseTask",
    "setup_logging",
]
