"""
Lockfile 模块
"""
from .models import PackageEntry, WorkspaceLock, ROOT_KEY, ROOT_PATH
from .io import (
    lockfile_path,
    parse_lockfile,
    read_lockfile,
    serialize_lockfile,
    write_lockfile,
)

__all__ = [
    "PackageEntry",
    "WorkspaceLock",
    "ROOT_KEY",
    "ROOT_PATH",
    "lockfile_path",
    "parse_lockfile",
    "read_lockfile",
    "serialize_lockfile",
    "write_lockfile",
]
