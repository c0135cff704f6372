"""Task definitions for invoke collections."""

from .apidoc_task import ApiDocTask
from .document_task import DocumentTask
from .reference_task import ReferenceTask
from .release_task import ReleaseTask

__all__ = ["ApiDocTask", "DocumentTask", "ReferenceTask", "ReleaseTask"]
