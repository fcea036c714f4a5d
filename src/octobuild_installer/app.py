# entry point for building the Octobuild installer
# reads the product version from the manifest and drives the WiX toolset

import argparse
import subprocess
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Sequence

from octobuild_installer.broadcast import broadcast_setting_change
from octobuild_installer.compiler import build_msi, build_wxs
from octobuild_installer.errors import InstallerError
from octobuild_installer.file_operations import Logger
from octobuild_installer.product import create_project
from octobuild_installer.version import parse_version, read_version

DEFAULT_MANIFEST = "Cargo.toml"
DEFAULT_OUT_DIR = "target"


def build(args: argparse.Namespace) -> int:
    token = read_version(args.manifest)
    version = parse_version(args.manifest, token)
    print(f"Octobuild version: {token}")
    project = create_project(version, token)

    outputs = []
    if args.wxs_only:
        # Layout inspection only; binaries may not be built yet
        outputs.append(build_wxs(project, args.source_root, args.out_dir, check_sources=False))
    else:
        outputs.append(build_msi(project, args.source_root, args.out_dir, wix_bin=args.wix_bin))
        outputs.append(build_wxs(project, args.source_root, args.out_dir))

    Logger.log_event({
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": token,
        "manifest": str(args.manifest),
        "outputs": [str(p) for p in outputs],
        "wix_bin": str(args.wix_bin) if args.wix_bin else None,
    })

    print(f"\nBuild complete. Version: {token}")
    for path in outputs:
        print(f"  {path}")
    return 0


def show_version(args: argparse.Namespace) -> int:
    token = read_version(args.manifest)
    parse_version(args.manifest, token)
    print(token)
    return 0


def broadcast(args: argparse.Namespace) -> int:
    broadcast_setting_change()
    return 0


def make_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="octobuild-installer",
                                 description="Build the Octobuild Windows installer (MSI + WXS).")
    sub = ap.add_subparsers(dest="command")

    build_cmd = sub.add_parser("build", help="Build the MSI and WXS artifacts (default).")
    version_cmd = sub.add_parser("version", help="Print the version read from the manifest.")
    sub.add_parser("broadcast", help="Notify running programs that the environment changed.")

    # Options are accepted before or after the subcommand; subcommands must not reset them
    for cmd, top in ((ap, True), (build_cmd, False), (version_cmd, False)):
        cmd.add_argument("--manifest", type=Path, default=Path(DEFAULT_MANIFEST) if top else argparse.SUPPRESS,
                         help="Manifest holding the product version line.")
    for cmd, top in ((ap, True), (build_cmd, False)):
        cmd.add_argument("--source-root", type=Path, default=Path(".") if top else argparse.SUPPRESS,
                         help="Directory that packaged file paths are relative to.")
        cmd.add_argument("--out-dir", type=Path, default=Path(DEFAULT_OUT_DIR) if top else argparse.SUPPRESS,
                         help="Directory receiving the .msi and .wxs files.")
        cmd.add_argument("--wix-bin", type=Path, default=None if top else argparse.SUPPRESS,
                         help="WiX Toolset bin directory (defaults to %%WIX%%\\bin, then PATH).")
        cmd.add_argument("--wxs-only", action="store_true", default=False if top else argparse.SUPPRESS,
                         help="Only write the WiX source; skip candle/light.")
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = make_parser().parse_args(argv)
    handlers = {"build": build, "version": show_version, "broadcast": broadcast, None: build}

    try:
        return handlers[args.command](args)
    except InstallerError as e:
        Logger.log_error(str(e))
        print(f"error: {e}")
        return 2
    except subprocess.CalledProcessError as e:
        print(f"Build failed with exit code {e.returncode}")
        return e.returncode


if __name__ == "__main__":
    raise SystemExit(main())
