"""Web site publication: reference pages, release information and uploads."""

from .publisher import ReferencePublisher
from .release_info import ReleaseInfo, update_index_files
from .rsync import rsync_to_host

__all__ = [
    "ReferencePublisher",
    "ReleaseInfo",
    "rsync_to_host",
    "update_index_files",
]
