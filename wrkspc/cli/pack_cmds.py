"""
wrkspc CLI — pack 命令
"""
from pathlib import Path
from typing import Optional

import typer

from .common import console, resolve_dir, run
from ..config import settings


# ── 内部实现 ──────────────────────────────────────────────

def _do_pack(directory: Optional[Path] = None, no_binaries: bool = False):
    """打包 workspace"""
    from ..packer import pack

    working_dir = resolve_dir(directory)
    lock, path = run(pack(working_dir, not no_binaries, settings))

    members = len(lock.packages) - 1
    console.print(f"[green]✅ 已写入 {path}[/green]")
    console.print(f"   包: 根 + {members} 个成员")
    if lock.binaries is not None:
        without = sum(1 for s in lock.binaries.values() if s is None)
        console.print(f"   bin: {len(lock.binaries)} 个（{without} 个没有 shebang）")


# ── 注册 ──────────────────────────────────────────────────

def register(app: typer.Typer):
    """注册 pack 子命令"""

    @app.command()
    def pack(
        ctx: typer.Context,
        directory: Optional[Path] = typer.Option(
            None, "--dir", "-d", help="workspace 所在目录（默认当前目录）"
        ),
        no_binaries: bool = typer.Option(False, "--no-binaries", help="不采集 bin 文件"),
    ):
        """📦 创建 workspace lockfile"""
        root = ctx.obj or {}
        _do_pack(
            directory or root.get("directory"),
            no_binaries or root.get("no_binaries", False),
        )
