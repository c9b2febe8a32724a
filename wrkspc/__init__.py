"""
wrkspc - 把 npm / yarn / pnpm workspace 打包成单个 lockfile，并可从中还原
"""
__version__ = "0.1.0"

__all__ = ["cli", "config", "errors", "lockfile", "packer", "shebang", "tasks", "unpacker", "workspace"]
