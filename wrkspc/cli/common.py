"""
wrkspc CLI — 公共常量与工具函数
"""
import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Optional, TypeVar

import typer
from rich.console import Console
from rich.markup import escape

from .. import __version__
from ..config import Settings, settings
from ..errors import WrkspcError

T = TypeVar("T")

# ── 全局单例 ──────────────────────────────────────────────
console = Console()
err_console = Console(stderr=True)

VERSION = __version__

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


# ── 日志 ──────────────────────────────────────────────────

def setup_logging(verbose: bool = False, config: Settings = settings) -> None:
    """配置根 logger（只在 CLI 入口调用一次）"""
    level = logging.DEBUG if (verbose or config.debug) else getattr(logging, config.log_level)
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)


# ── 路径辅助 ──────────────────────────────────────────────

def resolve_dir(path: Optional[Path]) -> Path:
    """--dir 未指定时使用当前目录"""
    return (path or Path.cwd()).expanduser().resolve()


# ── 执行 ──────────────────────────────────────────────────

def run(coro: Awaitable[T]) -> T:
    """
    执行一个异步操作

    WrkspcError / OSError 打印到 stderr 并以状态 1 退出
    """
    try:
        return asyncio.run(coro)
    except (WrkspcError, OSError) as e:
        err_console.print(f"[red]❌ {escape(str(e))}[/red]")
        raise typer.Exit(code=1)
