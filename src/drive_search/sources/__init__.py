"""
Sources — adapters for remote file stores.

Public surface
--------------
- :class:`DocumentSourceBase` — abstract source (subclass for Dropbox, S3, …).
- :class:`GoogleDriveSource` — Google Drive v3 adapter.
"""

from drive_search.sources.base import DocumentSourceBase
from drive_search.sources.google_drive import GoogleDriveSource

__all__ = ["DocumentSourceBase", "GoogleDriveSource"]
