"""
错误类型

所有异常都继承 WrkspcError，CLI 层统一捕获并以非零状态退出。
"""
from typing import Mapping, Optional


class WrkspcError(Exception):
    """基础异常，携带可选提示 hint 与上下文 context"""

    def __init__(
        self,
        message: str,
        *,
        hint: Optional[str] = None,
        context: Optional[Mapping[str, str]] = None,
    ):
        super().__init__(message)
        self.hint = hint
        self.context = dict(context or {})

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.hint:
            parts.append(f"Hint: {self.hint}")
        for key, value in self.context.items():
            if value:
                parts.append(f"  {key}: {value}")
        return "\n".join(parts)


class WorkspaceConfigError(WrkspcError):
    """找不到 workspaces 配置，或配置无法解析"""


class DescriptorError(WrkspcError):
    """package.json 不存在或不是合法的 JSON 对象"""


class LockfileError(DescriptorError):
    """workspace-lock.json 不存在或格式错误"""


class BinaryReadError(WrkspcError):
    """声明的 bin 文件无法读取"""
