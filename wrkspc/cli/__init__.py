"""
wrkspc CLI 入口

模块划分:
  common.py       — 控制台、日志、执行与错误处理
  pack_cmds.py    — pack（默认命令）
  unpack_cmds.py  — unpack
"""
import typer
from pathlib import Path
from typing import Optional

from .common import console, setup_logging, VERSION
from .pack_cmds import _do_pack


# ── Typer App ─────────────────────────────────────────────

app = typer.Typer(
    name="wrkspc",
    help="Pack & restore yarn / npm / pnpm workspaces",
    invoke_without_command=True,
    no_args_is_help=False,
    add_completion=False,
)


# ── 注册子命令模块 ─────────────────────────────────────────

from . import pack_cmds, unpack_cmds

pack_cmds.register(app)
unpack_cmds.register(app)


def _show_version(value: bool):
    if value:
        console.print(f"wrkspc {VERSION}")
        raise typer.Exit()


# ── 主入口 callback ────────────────────────────────────────

@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    directory: Optional[Path] = typer.Option(
        None, "--dir", "-d", help="workspace 所在目录（默认当前目录）"
    ),
    no_binaries: bool = typer.Option(False, "--no-binaries", help="不采集 bin 文件"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="输出调试日志"),
    version: bool = typer.Option(
        False, "--version", callback=_show_version, is_eager=True, help="显示版本号"
    ),
):
    """
    📦 wrkspc - 打包 / 还原 workspace

      wrkspc              打包当前目录（等同 wrkspc pack）
      wrkspc -d ./repo    打包指定目录
      wrkspc unpack       从 workspace-lock.json 还原
      wrkspc -d ./repo unpack   还原指定目录
    """
    setup_logging(verbose)
    # 根级选项同样作用于子命令（子命令自己的选项优先）
    ctx.obj = {"directory": directory, "no_binaries": no_binaries}

    if ctx.invoked_subcommand is not None:
        return

    # 默认：pack
    _do_pack(directory, no_binaries)
