"""File system subsystem: blobs, the inode table, and path navigation.

Re-exports public symbols so callers can write::

    from virtual_fs.fs import FileSystem, Directory
"""

from virtual_fs.fs.filesystem import (
    ROOT_PATH,
    Blob,
    BlobKind,
    Directory,
    File,
    FileSystem,
    ListingEntry,
)

__all__ = [
    "ROOT_PATH",
    "Blob",
    "BlobKind",
    "Directory",
    "File",
    "FileSystem",
    "ListingEntry",
]
