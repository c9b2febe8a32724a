"""
Unpacker - 从 workspace-lock.json 还原 package.json 与 bin 桩文件
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .config import Settings, settings as default_settings
from .lockfile import PackageEntry, WorkspaceLock, lockfile_path, read_lockfile
from .tasks import gather_ordered, run_blocking
from .workspace import write_descriptor

logger = logging.getLogger(__name__)


@dataclass
class UnpackReport:
    """还原结果"""
    packages: List[Path] = field(default_factory=list)
    binaries_written: List[Path] = field(default_factory=list)
    binaries_skipped: List[Path] = field(default_factory=list)


async def restore_package(
    working_dir: Path,
    entry: PackageEntry,
    settings: Settings = default_settings,
) -> Path:
    """把一个包的 package.json 写回 <working_dir>/<entry.path>/"""
    path = working_dir / entry.path / settings.descriptor_name
    logger.info(f"Unpacking {entry.name} into \"{path}\"")

    await write_descriptor(path, entry.package, indent=settings.json_indent)

    logger.info(f"Unpacking {entry.name} completed")
    return path


async def restore_binary(
    working_dir: Path,
    relative_path: str,
    shebang: Optional[str],
    force: bool = False,
) -> Optional[Path]:
    """
    写出 bin 桩文件，内容只有 shebang 行（没有 shebang 时为空文件）

    Returns:
        写入的路径；未开启 force 且文件已存在时返回 None
    """
    full_path = working_dir / relative_path

    if not force and await run_blocking(full_path.exists):
        logger.info(
            f"Unpacking {full_path} binary skipped, already exists. "
            "Run with --force flag to overwrite existing binaries."
        )
        return None

    logger.info(f"Unpacking {full_path} binary, with shebang {shebang}")

    await run_blocking(lambda: full_path.parent.mkdir(parents=True, exist_ok=True))
    await run_blocking(full_path.write_text, shebang or "", "utf-8")

    logger.info(f"Unpacking of {full_path} completed")
    return full_path


async def restore(
    working_dir: Path,
    lock: WorkspaceLock,
    force: bool = False,
    settings: Settings = default_settings,
) -> UnpackReport:
    """
    按 lockfile 内容还原文件

    包与 bin 之间互不依赖，全部并发写入；任一写入失败立即抛出，
    已完成的写入不会回滚。
    """
    working_dir = Path(working_dir).resolve()
    report = UnpackReport()

    report.packages = await gather_ordered(
        restore_package(working_dir, entry, settings)
        for entry in lock.packages.values()
    )

    if lock.binaries is not None:
        logger.info("Unpacking binaries")
        paths = list(lock.binaries)
        written = await gather_ordered(
            restore_binary(working_dir, path, lock.binaries[path], force)
            for path in paths
        )
        for path, result in zip(paths, written):
            if result is None:
                report.binaries_skipped.append(working_dir / path)
            else:
                report.binaries_written.append(result)

    return report


async def unpack(
    working_dir: Path,
    force: bool = False,
    settings: Settings = default_settings,
) -> UnpackReport:
    """
    读取 <working_dir>/workspace-lock.json 并还原

    Raises:
        LockfileError: lockfile 不存在或格式错误（此时不会写任何文件）
    """
    working_dir = Path(working_dir).resolve()
    lock = await read_lockfile(lockfile_path(working_dir, settings))
    return await restore(working_dir, lock, force, settings)
