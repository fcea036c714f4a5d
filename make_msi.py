# make_msi.py
# Builds target\octobuild-<version>.msi and .wxs from the repository root:
#   python make_msi.py [--manifest Cargo.toml] [--wix-bin "C:\Program Files (x86)\WiX Toolset v3.14\bin"]
# The version comes from the first `version = "..."` line of the manifest.

from octobuild_installer.app import main

if __name__ == "__main__":
    raise SystemExit(main())
