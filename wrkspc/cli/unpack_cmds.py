"""
wrkspc CLI — unpack 命令
"""
from pathlib import Path
from typing import Optional

import typer

from .common import console, resolve_dir, run
from ..config import settings


# ── 内部实现 ──────────────────────────────────────────────

def _do_unpack(directory: Optional[Path] = None, force: bool = False):
    """从 lockfile 还原 workspace"""
    from ..unpacker import unpack

    working_dir = resolve_dir(directory)
    report = run(unpack(working_dir, force, settings))

    console.print(f"[green]✅ 已还原 {len(report.packages)} 个 package.json[/green]")
    if report.binaries_written:
        console.print(f"   bin: 写入 {len(report.binaries_written)} 个")
    if report.binaries_skipped:
        console.print(
            f"   [yellow]跳过 {len(report.binaries_skipped)} 个已存在的 bin"
            "（使用 --force 覆盖）[/yellow]"
        )


# ── 注册 ──────────────────────────────────────────────────

def register(app: typer.Typer):
    """注册 unpack 子命令"""

    @app.command()
    def unpack(
        ctx: typer.Context,
        directory: Optional[Path] = typer.Option(
            None, "--dir", "-d", help="lockfile 所在目录（默认当前目录）"
        ),
        force: bool = typer.Option(False, "--force", help="覆盖已存在的 bin 文件"),
    ):
        """📂 从 lockfile 还原 workspace"""
        root = ctx.obj or {}
        _do_unpack(directory or root.get("directory"), force)
