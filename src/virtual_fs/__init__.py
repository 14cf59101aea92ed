"""virtual-fs: an in-memory hierarchical file system with a small shell."""

__version__ = "0.1.0"
