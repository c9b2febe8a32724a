"""
Workspace 成员发现

1. 从根 package.json 的 workspaces 字段（或 pnpm-workspace.yaml）取得 glob 列表
2. 把 glob 列表解析成有序的 {成员 key: 绝对目录}
"""
import logging
from pathlib import Path, PurePosixPath
from typing import Any, Dict, List, Optional

import yaml

from ..config import Settings, settings as default_settings
from ..errors import WorkspaceConfigError
from ..tasks import gather_ordered, run_blocking
from .descriptor import read_descriptor

logger = logging.getLogger(__name__)

IGNORED_SEGMENT = "node_modules"


# ── glob 列表 ─────────────────────────────────────────────

async def get_workspaces(
    working_dir: Path,
    package_json: Dict[str, Any],
    settings: Settings = default_settings,
) -> List[str]:
    """
    取得 workspace glob 列表

    优先使用 package.json 的 workspaces 字段，
    其次读取 pnpm-workspace.yaml 的 packages。

    Raises:
        WorkspaceConfigError: 两处都没有配置
    """
    workspaces = _patterns_from_field(package_json.get("workspaces"))

    if workspaces is None:
        workspaces = await read_fallback_config(working_dir, settings)

    if workspaces is None:
        raise WorkspaceConfigError(
            "No workspaces config found.",
            hint=f"Add a `workspaces` field to {settings.descriptor_name} "
                 f"or create {settings.fallback_config_name}.",
            context={"path": str(working_dir)},
        )

    return workspaces


async def read_fallback_config(
    working_dir: Path,
    settings: Settings = default_settings,
) -> Optional[List[str]]:
    """读取 pnpm-workspace.yaml，不存在时返回 None"""
    config_path = Path(working_dir) / settings.fallback_config_name

    if not await run_blocking(config_path.is_file):
        return None

    try:
        raw = await run_blocking(config_path.read_text, "utf-8")
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise WorkspaceConfigError(
            f"Invalid {settings.fallback_config_name}.",
            hint=str(exc),
            context={"path": str(config_path)},
        ) from exc

    if not isinstance(data, dict):
        return None

    logger.debug(f"使用 {config_path} 中的 workspace 配置")
    return _patterns_from_field(data.get("packages"))


def _patterns_from_field(value: Any) -> Optional[List[str]]:
    # Yarn 的对象写法: {"packages": [...], "nohoist": [...]}
    if isinstance(value, dict):
        value = value.get("packages")
    if not isinstance(value, list):
        return None
    patterns = [item for item in value if isinstance(item, str) and item.strip()]
    return patterns


# ── glob 解析 ─────────────────────────────────────────────

async def map_workspaces(
    working_dir: Path,
    patterns: List[str],
    settings: Settings = default_settings,
) -> Dict[str, Path]:
    """
    把 glob 列表解析成有序的 {成员 key: 绝对目录}

    顺序: 按 pattern 声明顺序；同一 pattern 内按相对路径排序。
    以 ! 开头的 pattern 用于排除。key 取成员 package.json 的 name，
    没有 name 时取目录名。

    Raises:
        WorkspaceConfigError: 两个成员的 key 重复
        DescriptorError: 成员的 package.json 无法解析
    """
    root = Path(working_dir).resolve()
    includes = [_clean_pattern(p) for p in patterns if not p.startswith("!")]
    excludes = [_clean_pattern(p[1:]) for p in patterns if p.startswith("!")]

    included = await gather_ordered(
        run_blocking(_match_directories, root, pattern, settings.descriptor_name)
        for pattern in includes if pattern
    )
    excluded = await gather_ordered(
        run_blocking(_match_directories, root, pattern, settings.descriptor_name)
        for pattern in excludes if pattern
    )
    excluded_set = {path for matches in excluded for path in matches}

    directories: List[Path] = []
    seen = set()
    for matches in included:
        for path in matches:
            if path in excluded_set or path in seen:
                continue
            seen.add(path)
            directories.append(path)

    descriptors = await gather_ordered(
        read_descriptor(directory / settings.descriptor_name)
        for directory in directories
    )

    members: Dict[str, Path] = {}
    for directory, descriptor in zip(directories, descriptors):
        key = _member_key(directory, descriptor)
        if key in members:
            raise WorkspaceConfigError(
                "Multiple workspace members share the same name.",
                context={
                    "name": key,
                    "first": str(members[key]),
                    "second": str(directory),
                },
            )
        members[key] = directory

    logger.debug(f"发现 {len(members)} 个 workspace 成员")
    return members


def _clean_pattern(pattern: str) -> str:
    pattern = pattern.strip().replace("\\", "/")
    while pattern.startswith("./"):
        pattern = pattern[2:]
    return pattern.rstrip("/")


def _match_directories(root: Path, pattern: str, descriptor_name: str) -> List[Path]:
    """同步: 返回匹配 pattern 且含有 package.json 的目录（已排序）"""
    if PurePosixPath(pattern).is_absolute() or Path(pattern).is_absolute():
        raise WorkspaceConfigError(
            "Workspace patterns must be relative to the workspace root.",
            context={"pattern": pattern, "path": str(root)},
        )

    matches = []
    try:
        for candidate in root.glob(pattern):
            if candidate == root or not candidate.is_dir():
                continue
            relative = candidate.relative_to(root)
            if IGNORED_SEGMENT in relative.parts:
                continue
            if not (candidate / descriptor_name).is_file():
                continue
            matches.append(candidate)
    except (NotImplementedError, ValueError) as exc:
        # 越出根目录（..）或 pathlib 不支持的 pattern
        raise WorkspaceConfigError(
            f"Unsupported workspace pattern: {exc}",
            context={"pattern": pattern, "path": str(root)},
        ) from exc
    matches.sort(key=lambda p: PurePosixPath(p.relative_to(root)).as_posix())
    return matches


def _member_key(directory: Path, descriptor: Dict[str, Any]) -> str:
    name = descriptor.get("name")
    if isinstance(name, str) and name:
        return name
    return directory.name


# ── 对外入口 ──────────────────────────────────────────────

async def discover_members(
    working_dir: Path,
    package_json: Dict[str, Any],
    settings: Settings = default_settings,
) -> Dict[str, Path]:
    """根据根 package.json 发现所有 workspace 成员"""
    patterns = await get_workspaces(working_dir, package_json, settings)
    logger.debug(f"workspace patterns: {patterns}")
    return await map_workspaces(working_dir, patterns, settings)
