from pathlib import Path

from ..errors import MissingSourceError

class FileManager:
    @staticmethod
    def write_to_file(filepath: Path, content: str) -> Path:
        try:
            filepath.parent.mkdir(parents=True, exist_ok=True)
            # WiX reads its sources as UTF-8; keep CRLF out of generated files
            filepath.write_text(content, encoding="utf-8", newline="\n")
        except OSError as e:
            raise IOError(f"Failed to write to file {filepath}: {e}") from e
        return filepath

    @staticmethod
    def append_to_file(filepath: Path, content: str):
        try:
            filepath.parent.mkdir(parents=True, exist_ok=True)
            with filepath.open("a", encoding="utf-8") as log:
                log.write(content)
        except OSError as e:
            raise IOError(f"Failed to append to file {filepath}: {e}") from e

    @staticmethod
    def require_file(filepath: Path) -> Path:
        """Resolve a packaged source file, failing before the toolchain would."""
        if not filepath.is_file():
            raise MissingSourceError(filepath)
        return filepath.resolve()
