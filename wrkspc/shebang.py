"""
Shebang 检测

只看文件开头: 以 #! 开头时取第一行（不含行尾符），否则返回 None。
"""
import re
from typing import Optional

SHEBANG_RE = re.compile(r"^#![^\r\n\u2028\u2029]*")


def detect_shebang(content: bytes) -> Optional[str]:
    """从文件原始字节中提取 shebang 行"""
    text = content.decode("utf-8", errors="replace")
    match = SHEBANG_RE.match(text)
    if match is None:
        return None
    return match.group(0)
