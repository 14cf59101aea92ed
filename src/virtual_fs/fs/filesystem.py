"""In-memory file system with a working directory and path navigation.

The tree is made of two kinds of *blob*:

- **File**: a leaf holding an opaque byte payload.
- **Directory**: an ordered list of children, in insertion order.

Blobs live in an inode table owned by the ``FileSystem``.  A directory
stores the inode numbers of its children and every blob stores the
inode number of its parent, so the parent link is a plain index into
the table rather than a second owner of the child.

Path resolution walks segment by segment from either the root
(absolute paths) or the working directory (relative paths):

- ``.`` and empty segments stay where they are.
- ``..`` moves to the parent, and stays put at the root.
- any other name picks the *first* child directory with that name.
  Files are never traversed and duplicate names are allowed.

Locking happens in two tiers.  Each directory guards its own children
list, and the file system guards the working directory and the inode
table.  The two are never held at the same time.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum
from itertools import count
from typing import TypeAlias, assert_never

from virtual_fs.logging import Logger, LogLevel

ROOT_PATH = "/"

_KILOBYTE = 1024


class BlobKind(StrEnum):
    """The two kinds of object that can live in the tree."""

    FILE = "file"
    DIRECTORY = "dir"


@dataclass(eq=False)
class File:
    """A leaf blob holding an opaque content payload.

    ``content`` is stored as given and never copied, so callers should
    treat it as read-only.
    """

    name: str
    content: bytes = b""
    parent: int | None = None

    @property
    def kind(self) -> BlobKind:
        """Return ``BlobKind.FILE``."""
        return BlobKind.FILE

    @property
    def size(self) -> int:
        """Return the payload length in bytes."""
        return len(self.content)


@dataclass(eq=False)
class Directory:
    """A blob holding an ordered list of child inode numbers."""

    name: str
    parent: int | None = None
    _children: list[int] = field(default_factory=list, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    @property
    def kind(self) -> BlobKind:
        """Return ``BlobKind.DIRECTORY``."""
        return BlobKind.DIRECTORY

    @property
    def children(self) -> list[int]:
        """Return a snapshot of the child inode numbers in insertion order.

        The snapshot may be stale as soon as it is returned.
        """
        with self._lock:
            return list(self._children)

    def add(self, ino: int) -> None:
        """Append a child inode number to the end of the children list."""
        with self._lock:
            self._children.append(ino)


Blob: TypeAlias = File | Directory


@dataclass(frozen=True)
class ListingEntry:
    """One row of a directory listing.

    ``size`` is the byte size for files and ``None`` for directories.
    """

    kind: BlobKind
    name: str
    size: int | None = None

    @property
    def size_label(self) -> str:
        """Render the size in whole kilobytes (truncated), or ``-``."""
        if self.size is None:
            return "-"
        return f"{self.size // _KILOBYTE}kb"


def _require_name(name: str) -> None:
    """Reject empty names; nothing else is validated."""
    if not name:
        msg = "Name must not be empty"
        raise ValueError(msg)


class FileSystem:
    """An in-memory tree of files and directories with a working directory.

    New files and directories are always created inside the working
    directory.  The working directory only ever changes through
    ``change_dir``, and only when the whole path resolves.
    """

    def __init__(self, *, logger: Logger | None = None) -> None:
        """Create a file system holding only an empty root directory."""
        self._lock = threading.Lock()
        self._logger = logger
        self._inode_counter = count(start=0)
        root = Directory(name="")
        self._root_ino: int = next(self._inode_counter)
        self._blobs: dict[int, Blob] = {self._root_ino: root}
        self._cwd_ino: int = self._root_ino

    # -- lookup --------------------------------------------------------

    @property
    def root(self) -> Directory:
        """Return the root directory."""
        return self._directory(self._root_ino)

    @property
    def cwd(self) -> Directory:
        """Return the current working directory."""
        with self._lock:
            return self._directory(self._cwd_ino)

    def get(self, ino: int) -> Blob:
        """Return the blob stored under *ino*.

        Raises:
            KeyError: If no blob has that inode number.

        """
        try:
            return self._blobs[ino]
        except KeyError:
            msg = f"No such inode: {ino}"
            raise KeyError(msg) from None

    def parent_of(self, blob: Blob) -> Directory | None:
        """Return the directory that owns *blob*, or None for the root."""
        if blob.parent is None:
            return None
        return self._directory(blob.parent)

    def children_of(self, directory: Directory) -> list[Blob]:
        """Return the children of *directory* in insertion order."""
        return [self._blobs[ino] for ino in directory.children]

    def _directory(self, ino: int) -> Directory:
        blob = self._blobs[ino]
        if not isinstance(blob, Directory):  # pragma: no cover
            msg = f"Inode {ino} is not a directory"
            raise TypeError(msg)
        return blob

    # -- creation ------------------------------------------------------

    def create_file(self, name: str, content: bytes = b"") -> File:
        """Create a file in the working directory.

        Args:
            name: Non-empty file name.  Duplicates are allowed.
            content: The initial payload (may be empty).

        Raises:
            ValueError: If *name* is empty.

        """
        _require_name(name)
        file = File(name=name, content=content)
        self._attach(file)
        self._log(LogLevel.INFO, f"Created file {name} ({file.size} bytes)")
        return file

    def create_dir(self, name: str, children: Iterable[Blob] = ()) -> Directory:
        """Create a directory in the working directory.

        The optional *children* are detached blobs (built directly, not
        through this file system) that the new directory adopts in the
        order given.

        Args:
            name: Non-empty directory name.  Duplicates are allowed.
            children: Initial contents of the new directory.

        Raises:
            ValueError: If *name* is empty or a child cannot be adopted.

        """
        _require_name(name)
        adopted = list(children)
        seen: set[int] = set()
        for child in adopted:
            _require_name(child.name)
            if child.parent is not None or id(child) in seen:
                msg = f"Already attached to a directory: {child.name}"
                raise ValueError(msg)
            if isinstance(child, Directory) and child.children:
                msg = f"Cannot adopt a directory that already has children: {child.name}"
                raise ValueError(msg)
            seen.add(id(child))

        directory = Directory(name=name)
        dir_ino = self._attach(directory)
        for child in adopted:
            self._attach(child, parent_ino=dir_ino)
        self._log(LogLevel.INFO, f"Created directory {name}")
        return directory

    def _attach(self, blob: Blob, *, parent_ino: int | None = None) -> int:
        """Register *blob* in the inode table and link it under a parent.

        The parent defaults to the working directory.  The table update
        happens under the file system lock; the append happens afterwards
        under the parent's own lock.
        """
        with self._lock:
            if parent_ino is None:
                parent_ino = self._cwd_ino
            ino = next(self._inode_counter)
            blob.parent = parent_ino
            self._blobs[ino] = blob
            parent = self._directory(parent_ino)
        parent.add(ino)
        return ino

    # -- navigation ----------------------------------------------------

    def resolve(self, path: str) -> Directory:
        """Resolve *path* to a directory without changing the working directory.

        Raises:
            FileNotFoundError: If any named segment is not a child directory.

        """
        with self._lock:
            return self._directory(self._walk(path))

    def change_dir(self, path: str) -> None:
        """Make the directory at *path* the working directory.

        The working directory is only updated once every segment has
        resolved; on failure it is left untouched.

        Raises:
            FileNotFoundError: If any named segment is not a child directory.

        """
        with self._lock:
            try:
                self._cwd_ino = self._walk(path)
            except FileNotFoundError as e:
                self._log(LogLevel.WARNING, str(e))
                raise
        self._log(LogLevel.DEBUG, f"Changed directory to {path}")

    def _walk(self, path: str) -> int:
        """Return the inode number *path* resolves to.  Caller holds the lock."""
        if path == ROOT_PATH:
            return self._root_ino

        current = self._root_ino if path.startswith("/") else self._cwd_ino
        for part in path.strip("/").split("/"):
            if part in ("", "."):
                continue
            if part == "..":
                parent = self._blobs[current].parent
                if parent is not None:
                    current = parent
                continue
            found = self._find_child_dir(current, part)
            if found is None:
                msg = f"the directory '{path}' does not exist"
                raise FileNotFoundError(msg)
            current = found
        return current

    def _find_child_dir(self, ino: int, name: str) -> int | None:
        """Return the first child directory of *ino* called *name*."""
        for child_ino in self._directory(ino).children:
            match self._blobs[child_ino]:
                case Directory(name=child_name) if child_name == name:
                    return child_ino
                case File() | Directory():
                    continue
        return None

    # -- reporting -----------------------------------------------------

    def path_of(self, directory: Directory) -> str:
        """Return the absolute path of *directory*, always ending in ``/``."""
        path = ""
        node: Directory | None = directory
        while node is not None:
            path = f"{node.name}/{path}"
            node = self.parent_of(node)
        return path

    def current_dir(self) -> str:
        """Return the absolute path of the working directory."""
        return self.path_of(self.cwd)

    def list_dir(self, *, recursive: bool = False) -> list[ListingEntry]:
        """List the working directory's children in insertion order.

        With *recursive*, each directory is followed immediately by its
        own contents (pre-order, depth first), whose names are prefixed
        with the directory's displayed name and ``/``.
        """
        entries: list[ListingEntry] = []
        # Explicit stack of (blob, display name), pushed in reverse so
        # pops come out in insertion order.
        stack = [(blob, blob.name) for blob in reversed(self.children_of(self.cwd))]
        while stack:
            blob, name = stack.pop()
            match blob:
                case File():
                    entries.append(ListingEntry(kind=BlobKind.FILE, name=name, size=blob.size))
                case Directory():
                    entries.append(ListingEntry(kind=BlobKind.DIRECTORY, name=name))
                    if recursive:
                        children = self.children_of(blob)
                        stack.extend(
                            (child, f"{name}/{child.name}") for child in reversed(children)
                        )
                case _:
                    assert_never(blob)
        return entries

    def _log(self, level: LogLevel, message: str) -> None:
        if self._logger is not None:
            self._logger.log(level, message, source="fs")
