"""
Lockfile 数据模型
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..errors import LockfileError

ROOT_KEY = ""
ROOT_PATH = "."

# 路径 -> shebang（None 表示文件没有 shebang）
Binaries = Dict[str, Optional[str]]


@dataclass
class PackageEntry:
    """单个包：相对路径 + 完整的 package.json 内容"""
    path: str
    package: Dict[str, Any]

    @property
    def name(self) -> str:
        return self.package.get("name") or self.path

    def to_dict(self) -> dict:
        return {"path": self.path, "package": self.package}

    @classmethod
    def from_dict(cls, data: Any) -> "PackageEntry":
        if not isinstance(data, dict):
            raise LockfileError("Invalid package entry in lockfile.")
        path = data.get("path")
        package = data.get("package")
        if not isinstance(path, str) or not path:
            raise LockfileError("Invalid package entry `path` value.")
        if not isinstance(package, dict):
            raise LockfileError(
                "Invalid package entry `package` value.",
                context={"path": path},
            )
        return cls(path=path, package=package)


@dataclass
class WorkspaceLock:
    """
    整个 workspace 的快照

    binaries 是显式的可选值：
      None  → 打包时未采集 bin，序列化时不输出 binaries 键
      {}    → 采集了，但没有任何 bin
    """
    packages: Dict[str, PackageEntry] = field(default_factory=dict)
    binaries: Optional[Binaries] = None

    @property
    def root(self) -> Optional[PackageEntry]:
        return self.packages.get(ROOT_KEY)

    def to_dict(self) -> dict:
        data: dict = {
            "packages": {key: entry.to_dict() for key, entry in self.packages.items()},
        }
        if self.binaries is not None:
            data["binaries"] = dict(self.binaries)
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "WorkspaceLock":
        if not isinstance(data, dict):
            raise LockfileError("Invalid lockfile payload type.")

        packages_raw = data.get("packages")
        if not isinstance(packages_raw, dict):
            raise LockfileError("Invalid lockfile `packages` value.")
        packages = {
            key: PackageEntry.from_dict(value)
            for key, value in packages_raw.items()
        }

        binaries: Optional[Binaries] = None
        if "binaries" in data:
            binaries_raw = data["binaries"]
            if not isinstance(binaries_raw, dict):
                raise LockfileError("Invalid lockfile `binaries` value.")
            for path, shebang in binaries_raw.items():
                if shebang is not None and not isinstance(shebang, str):
                    raise LockfileError(
                        "Invalid shebang value in lockfile.",
                        context={"path": path},
                    )
            binaries = dict(binaries_raw)

        return cls(packages=packages, binaries=binaries)
