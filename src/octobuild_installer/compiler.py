"""
Drives the WiX Toolset v3 (candle + light) to turn a ``Project`` into
artifacts under an output directory:

    <out_dir>/<stem>.wxs              standalone WiX source
    <out_dir>/<stem>.msi              installer package
    <out_dir>/wix/<stem>.wxs|.wixobj  intermediates of the MSI build
"""

from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path
from typing import Optional

from . import wxs
from .errors import ToolchainNotFoundError
from .file_operations import FileManager
from .model import Project

CANDLE = "candle"
LIGHT = "light"
EXTENSIONS = ("WixUIExtension", "WixUtilExtension")


def run(cmd: list[str]) -> None:
    print("+", " ".join(cmd))
    subprocess.check_call(cmd)


def _tool(bin_dir: Path, name: str) -> Path:
    return bin_dir / (f"{name}.exe" if os.name == "nt" else name)


def _has_tools(bin_dir: Path) -> bool:
    return _tool(bin_dir, CANDLE).is_file() and _tool(bin_dir, LIGHT).is_file()


def find_wix_bin(wix_bin: Optional[Path] = None) -> Path:
    """
    Locate the directory holding candle and light: an explicit directory
    first, then %WIX%\\bin as set by the WiX installer, then PATH.
    """
    if wix_bin is not None:
        if _has_tools(Path(wix_bin)):
            return Path(wix_bin)
        raise ToolchainNotFoundError(str(_tool(Path(wix_bin), CANDLE)))

    wix_home = os.environ.get("WIX")
    if wix_home and _has_tools(Path(wix_home) / "bin"):
        return Path(wix_home) / "bin"

    candle = shutil.which(CANDLE)
    if candle and shutil.which(LIGHT):
        return Path(candle).parent
    raise ToolchainNotFoundError(CANDLE)


def _extension_args() -> list[str]:
    args: list[str] = []
    for extension in EXTENSIONS:
        args += ["-ext", extension]
    return args


def build_wxs(project: Project, source_root: Path, out_dir: Path, check_sources: bool = True) -> Path:
    """Write the WiX source for ``project`` and return its path."""
    text = wxs.render(project, Path(source_root), check_sources=check_sources)
    return FileManager.write_to_file(Path(out_dir) / f"{project.output_stem}.wxs", text)


def build_msi(project: Project, source_root: Path, out_dir: Path, wix_bin: Optional[Path] = None) -> Path:
    """Compile and link ``project`` into an MSI; toolchain failures propagate unchanged."""
    bin_dir = find_wix_bin(wix_bin)
    out_dir = Path(out_dir)
    work_dir = out_dir / "wix"

    source = build_wxs(project, source_root, work_dir)
    wixobj = work_dir / f"{project.output_stem}.wixobj"
    msi = out_dir / f"{project.output_stem}.msi"

    run([
        str(_tool(bin_dir, CANDLE)), "-nologo",
        "-arch", project.platform,
        *_extension_args(),
        "-out", str(wixobj),
        str(source),
    ])
    run([
        str(_tool(bin_dir, LIGHT)), "-nologo",
        *_extension_args(),
        *project.light_options,
        "-out", str(msi),
        str(wixobj),
    ])
    return msi
