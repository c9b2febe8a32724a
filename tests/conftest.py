import json
from pathlib import Path

import pytest


def write_json(path: Path, data) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=4), encoding="utf-8")
    return path


def write_file(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """根包 + packages/* 下两个成员，其中 cli 声明了两个 bin"""
    root = tmp_path / "repo"
    write_json(root / "package.json", {
        "name": "monorepo",
        "private": True,
        "workspaces": ["packages/*"],
    })
    write_json(root / "packages" / "core" / "package.json", {
        "name": "@acme/core",
        "version": "1.0.0",
        "dependencies": {"lodash": "^4.17.21"},
    })
    write_json(root / "packages" / "cli" / "package.json", {
        "name": "@acme/cli",
        "version": "2.1.0",
        "bin": {
            "acme": "./bin/acme.js",
            "acme-raw": "bin/raw.js",
        },
    })
    write_file(root / "packages" / "cli" / "bin" / "acme.js",
               "#!/usr/bin/env node\nrequire('../dist/index.js');\n")
    write_file(root / "packages" / "cli" / "bin" / "raw.js",
               "module.exports = {};\n")
    return root
