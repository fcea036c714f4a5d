from __future__ import annotations

from pathlib import Path

import pytest

SOURCE_FILES = (
    "target/x86_64-pc-windows-gnu/release/xgConsole.exe",
    "target/x86_64-pc-windows-gnu/release/octobuild.dll",
    "target/i686-pc-windows-gnu/release/octobuild.dll",
    "wixcs/octobuild.targets",
    "LICENSE",
    "LICENSE.rtf",
)


@pytest.fixture
def source_root(tmp_path: Path) -> Path:
    """A checkout with every file the Octobuild package ships."""
    root = tmp_path / "octobuild"
    for rel in SOURCE_FILES:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"stub")
    return root


@pytest.fixture(autouse=True)
def local_app_data(tmp_path: Path, monkeypatch) -> Path:
    """Keep Logger output inside the test's temporary directory."""
    path = tmp_path / "LocalAppData"
    monkeypatch.setenv("LOCALAPPDATA", str(path))
    return path
