import asyncio
import json
import shutil
from pathlib import Path

import pytest

from conftest import write_file
from wrkspc.errors import DescriptorError
from wrkspc.lockfile import PackageEntry, WorkspaceLock, write_lockfile
from wrkspc.packer import pack
from wrkspc.unpacker import restore, unpack


def _descriptors(root: Path) -> dict:
    return {
        path.relative_to(root).as_posix(): path.read_text(encoding="utf-8")
        for path in sorted(root.rglob("package.json"))
    }


def _lock_with_binaries(binaries) -> WorkspaceLock:
    return WorkspaceLock(
        packages={"": PackageEntry(path=".", package={"name": "root"})},
        binaries=binaries,
    )


def test_pack_then_unpack_into_empty_directory(workspace: Path, tmp_path: Path):
    asyncio.run(pack(workspace))
    target = tmp_path / "restored"
    target.mkdir()
    shutil.copy(workspace / "workspace-lock.json", target / "workspace-lock.json")

    report = asyncio.run(unpack(target))

    assert _descriptors(target) == _descriptors(workspace)
    assert len(report.packages) == 3
    assert (target / "packages" / "cli" / "bin" / "acme.js").read_text() == "#!/usr/bin/env node"
    assert (target / "packages" / "cli" / "bin" / "raw.js").read_text() == ""


def test_restored_descriptor_is_four_space_json(tmp_path: Path):
    lock = WorkspaceLock(packages={
        "": PackageEntry(path=".", package={"name": "root", "workspaces": ["a"]}),
        "a": PackageEntry(path="nested/deep/a", package={"name": "a", "version": "1.0.0"}),
    })
    asyncio.run(restore(tmp_path, lock))

    text = (tmp_path / "nested" / "deep" / "a" / "package.json").read_text(encoding="utf-8")
    assert text == json.dumps({"name": "a", "version": "1.0.0"}, indent=4)


def test_descriptors_are_overwritten(tmp_path: Path):
    write_file(tmp_path / "package.json", '{"name": "old"}')
    asyncio.run(restore(tmp_path, _lock_with_binaries(None)))
    assert json.loads((tmp_path / "package.json").read_text())["name"] == "root"


def test_null_shebang_writes_empty_file(tmp_path: Path):
    asyncio.run(restore(tmp_path, _lock_with_binaries({"bin/cli.js": None})))
    assert (tmp_path / "bin" / "cli.js").read_text() == ""


def test_shebang_written_exactly(tmp_path: Path):
    asyncio.run(restore(tmp_path, _lock_with_binaries({"bin/cli.js": "#!/usr/bin/env node"})))
    assert (tmp_path / "bin" / "cli.js").read_text() == "#!/usr/bin/env node"


def test_existing_binary_is_kept_without_force(tmp_path: Path):
    write_file(tmp_path / "bin" / "cli.js", "hand edited")

    report = asyncio.run(restore(tmp_path, _lock_with_binaries({"bin/cli.js": "#!/bin/sh"})))

    assert (tmp_path / "bin" / "cli.js").read_text() == "hand edited"
    assert report.binaries_skipped == [tmp_path.resolve() / "bin" / "cli.js"]
    assert report.binaries_written == []


def test_existing_binary_is_overwritten_with_force(tmp_path: Path):
    write_file(tmp_path / "bin" / "cli.js", "hand edited")

    report = asyncio.run(restore(
        tmp_path, _lock_with_binaries({"bin/cli.js": "#!/bin/sh"}), force=True,
    ))

    assert (tmp_path / "bin" / "cli.js").read_text() == "#!/bin/sh"
    assert len(report.binaries_written) == 1


def test_absent_binaries_write_no_stubs(tmp_path: Path):
    report = asyncio.run(restore(tmp_path, _lock_with_binaries(None)))
    assert report.binaries_written == [] and report.binaries_skipped == []
    assert sorted(p.name for p in tmp_path.iterdir()) == ["package.json"]


def test_missing_lockfile_writes_nothing(tmp_path: Path):
    with pytest.raises(DescriptorError):
        asyncio.run(unpack(tmp_path))
    assert list(tmp_path.iterdir()) == []


def test_invalid_lockfile_writes_nothing(tmp_path: Path):
    write_file(tmp_path / "workspace-lock.json", "{ broken")
    with pytest.raises(DescriptorError):
        asyncio.run(unpack(tmp_path))
    assert [p.name for p in tmp_path.iterdir()] == ["workspace-lock.json"]


def test_unpack_reads_lockfile_from_working_dir(tmp_path: Path):
    lock = _lock_with_binaries({"scripts/run.sh": "#!/bin/bash"})
    asyncio.run(write_lockfile(lock, tmp_path / "workspace-lock.json"))

    asyncio.run(unpack(tmp_path))

    assert (tmp_path / "scripts" / "run.sh").read_text() == "#!/bin/bash"
