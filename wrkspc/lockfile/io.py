"""
Lockfile 读写
"""
import json
import logging
from pathlib import Path

from ..config import Settings, settings as default_settings
from ..errors import LockfileError
from ..tasks import run_blocking
from ..workspace.descriptor import loads_strict
from .models import WorkspaceLock

logger = logging.getLogger(__name__)


def serialize_lockfile(lock: WorkspaceLock, indent: int = 4) -> str:
    return json.dumps(lock.to_dict(), indent=indent, ensure_ascii=False)


def parse_lockfile(raw: str) -> WorkspaceLock:
    try:
        payload = loads_strict(raw)
    except ValueError as exc:
        raise LockfileError("Invalid lockfile JSON.", hint=str(exc)) from exc
    return WorkspaceLock.from_dict(payload)


def lockfile_path(working_dir: Path, settings: Settings = default_settings) -> Path:
    return Path(working_dir) / settings.lockfile_name


async def read_lockfile(path: Path) -> WorkspaceLock:
    """读取并解析 lockfile，不存在时抛出 LockfileError"""
    try:
        raw = await run_blocking(Path(path).read_text, "utf-8")
    except FileNotFoundError as exc:
        raise LockfileError(
            "Lockfile does not exist.",
            hint="Run `wrkspc pack` first.",
            context={"path": str(path)},
        ) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise LockfileError(
            f"Lockfile could not be read: {exc}",
            context={"path": str(path)},
        ) from exc
    return parse_lockfile(raw)


async def write_lockfile(lock: WorkspaceLock, path: Path, indent: int = 4) -> Path:
    """覆盖写入 lockfile"""
    lock_path = Path(path)
    await run_blocking(lock_path.write_text, serialize_lockfile(lock, indent), "utf-8")
    logger.info(f"Lockfile 已写入: {lock_path}")
    return lock_path
