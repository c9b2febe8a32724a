"""
package.json 读写
"""
import json
from pathlib import Path
from typing import Any, Dict

from ..errors import DescriptorError
from ..tasks import run_blocking


def loads_strict(raw: str) -> Any:
    """json.loads，但拒绝 NaN / Infinity 这类非标准常量"""
    return json.loads(raw, parse_constant=_reject_constant)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant {name}")


async def read_descriptor(path: Path) -> Dict[str, Any]:
    """
    读取并解析 package.json

    Args:
        path: package.json 的完整路径

    Returns:
        解析后的 JSON 对象（原样，不做规范化）

    Raises:
        DescriptorError: 文件不存在、无法读取、不是合法 JSON 或不是对象
    """
    try:
        raw = await run_blocking(Path(path).read_text, "utf-8")
    except FileNotFoundError as exc:
        raise DescriptorError(
            "Package descriptor not found.",
            context={"path": str(path)},
        ) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise DescriptorError(
            f"Package descriptor could not be read: {exc}",
            context={"path": str(path)},
        ) from exc

    try:
        data = loads_strict(raw)
    except ValueError as exc:
        raise DescriptorError(
            "Package descriptor is not valid JSON.",
            hint=str(exc),
            context={"path": str(path)},
        ) from exc

    if not isinstance(data, dict):
        raise DescriptorError(
            "Package descriptor must be a JSON object.",
            context={"path": str(path)},
        )
    return data


async def write_descriptor(path: Path, package: Dict[str, Any], indent: int = 4) -> None:
    """覆盖写入 package.json，自动创建父目录"""
    target = Path(path)
    await run_blocking(lambda: target.parent.mkdir(parents=True, exist_ok=True))
    content = json.dumps(package, indent=indent, ensure_ascii=False)
    await run_blocking(target.write_text, content, "utf-8")
