class InstallerError(Exception):
    """Base class for configuration errors detected before the toolchain runs."""


class VersionNotFoundError(InstallerError):
    def __init__(self, path) -> None:
        super().__init__(f"No version line found in manifest: {path}")
        self.path = path


class InvalidVersionError(InstallerError):
    def __init__(self, path, token: str) -> None:
        super().__init__(f"Invalid version {token!r} in manifest: {path}")
        self.path = path
        self.token = token


class MissingSourceError(InstallerError):
    def __init__(self, path) -> None:
        super().__init__(f"Source file not found: {path}")
        self.path = path


class ToolchainNotFoundError(InstallerError):
    def __init__(self, tool: str) -> None:
        super().__init__(
            f"WiX tool '{tool}' not found. Install the WiX Toolset v3, "
            f"set the WIX environment variable or pass --wix-bin."
        )
        self.tool = tool
