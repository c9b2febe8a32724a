"""
Packer - 把 workspace 打包成 workspace-lock.json

流程：
1. 读取根 package.json
2. 发现 workspace 成员并读取各自的 package.json
3. （可选）扫描 bin 文件的 shebang
4. 写出 lockfile
"""
import logging
import os
import posixpath
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .config import Settings, settings as default_settings
from .errors import BinaryReadError
from .lockfile import PackageEntry, WorkspaceLock, ROOT_KEY, ROOT_PATH, lockfile_path, write_lockfile
from .lockfile.models import Binaries
from .shebang import detect_shebang
from .tasks import gather_ordered, run_blocking
from .workspace import discover_members, read_descriptor

logger = logging.getLogger(__name__)


def normalize_path(path: str) -> str:
    """统一为正斜杠"""
    return path.replace("\\", "/")


def relative_posix(path: Path, start: Path) -> str:
    return normalize_path(os.path.relpath(path, start))


async def build_lock(
    working_dir: Path,
    with_binaries: bool = True,
    settings: Settings = default_settings,
) -> WorkspaceLock:
    """
    从文件系统构建 WorkspaceLock（不写文件）

    Args:
        working_dir: workspace 根目录
        with_binaries: 是否采集 bin 文件的 shebang
        settings: 配置

    Returns:
        WorkspaceLock，packages 中根包在最前，其余按发现顺序
    """
    working_dir = Path(working_dir).resolve()
    root_package = await read_descriptor(working_dir / settings.descriptor_name)

    members = await discover_members(working_dir, root_package, settings)

    member_packages = await gather_ordered(
        read_descriptor(directory / settings.descriptor_name)
        for directory in members.values()
    )

    packages: Dict[str, PackageEntry] = {
        ROOT_KEY: PackageEntry(path=ROOT_PATH, package=root_package),
    }
    for (key, directory), package in zip(members.items(), member_packages):
        packages[key] = PackageEntry(
            path=relative_posix(directory, working_dir),
            package=package,
        )

    lock = WorkspaceLock(packages=packages)

    if with_binaries:
        lock.binaries = await collect_binaries(working_dir, packages.values())

    return lock


def binary_paths(entries) -> List[str]:
    """
    收集所有包声明的 bin 路径（已加上包路径前缀并规范化）

    bin 只接受 {名称: 相对路径} 的对象形式，其他形式视为没有 bin。
    """
    paths: List[str] = []
    for entry in entries:
        bin_field = entry.package.get("bin")
        if not isinstance(bin_field, dict):
            if bin_field is not None:
                logger.debug(f"{entry.name}: 忽略非对象形式的 bin 字段")
            continue

        for bin_name, bin_path in bin_field.items():
            if not isinstance(bin_path, str):
                logger.debug(f"{entry.name}: 忽略 bin {bin_name!r}（路径不是字符串）")
                continue
            # 与 Node 的 path.join 一致: 绝对路径同样拼接在包路径之下
            relative = normalize_path(bin_path).lstrip("/")
            joined = posixpath.join(entry.path, relative)
            paths.append(posixpath.normpath(joined))
    return paths


async def collect_binaries(working_dir: Path, entries) -> Binaries:
    """读取每个 bin 文件并提取 shebang"""
    paths = binary_paths(entries)

    results: List[Tuple[str, Optional[str]]] = await gather_ordered(
        _read_shebang(working_dir, path) for path in paths
    )

    binaries: Binaries = {}
    for path, shebang in results:
        if path in binaries:
            # 多个包声明同一个文件时，后声明的覆盖前面的
            logger.warning(f"bin 路径重复，后者覆盖前者: {path}")
        binaries[path] = shebang
    return binaries


async def _read_shebang(working_dir: Path, path: str) -> Tuple[str, Optional[str]]:
    full_path = working_dir / path
    try:
        content = await run_blocking(full_path.read_bytes)
    except OSError as exc:
        raise BinaryReadError(
            f"Binary file could not be read: {exc.strerror or exc}",
            context={"path": str(full_path)},
        ) from exc

    shebang = detect_shebang(content)
    logger.debug(f"{path}: shebang = {shebang}")
    return path, shebang


async def pack(
    working_dir: Path,
    with_binaries: bool = True,
    settings: Settings = default_settings,
) -> Tuple[WorkspaceLock, Path]:
    """
    打包 workspace 并写出 lockfile

    任何读取失败都会在写文件之前抛出，不会留下不完整的 lockfile。

    Returns:
        (WorkspaceLock, lockfile 路径)
    """
    working_dir = Path(working_dir).resolve()
    logger.info(f"📦 打包 workspace: {working_dir}")

    lock = await build_lock(working_dir, with_binaries, settings)
    path = await write_lockfile(
        lock,
        lockfile_path(working_dir, settings),
        indent=settings.json_indent,
    )
    return lock, path
