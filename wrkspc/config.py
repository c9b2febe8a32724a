"""
wrkspc 配置管理
"""
from pydantic import Field
from pydantic_settings import BaseSettings
from typing import Literal


class Settings(BaseSettings):
    """应用配置（环境变量前缀 WRKSPC_）"""

    # 文件名
    lockfile_name: str = "workspace-lock.json"
    descriptor_name: str = "package.json"
    fallback_config_name: str = "pnpm-workspace.yaml"

    # 序列化
    json_indent: int = Field(default=4, ge=0)

    # 日志
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    debug: bool = False

    class Config:
        env_prefix = "WRKSPC_"
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
