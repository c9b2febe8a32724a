"""
Workspace 模块 - 成员发现与 package.json 读写
"""
from .descriptor import read_descriptor, write_descriptor
from .discovery import discover_members, get_workspaces, map_workspaces, read_fallback_config

__all__ = [
    "read_descriptor",
    "write_descriptor",
    "discover_members",
    "get_workspaces",
    "map_workspaces",
    "read_fallback_config",
]
