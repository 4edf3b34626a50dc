"""Data models for discovered template files."""

from dataclasses import dataclass
from pathlib import Path

from ..exceptions import FileAccessError


@dataclass(frozen=True)
class TemplateFile:
    """A template found on disk.

    Attributes:
        path: Absolute path to the file
        relative_path: Path relative to the scan root, always "/"-separated
    """

    path: Path
    relative_path: str

    def read(self, encoding: str = "utf-8") -> str:
        """Read the template source.

        Raises:
            FileAccessError: If the file cannot be read or decoded
        """
        try:
            return self.path.read_text(encoding=encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise FileAccessError(self.path, f"Cannot read file: {e}") from e

    @property
    def size_bytes(self) -> int:
        try:
            return self.path.stat().st_size
        except OSError as e:
            raise FileAccessError(self.path, f"Cannot stat file: {e}") from e
