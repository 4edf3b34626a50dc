"""Discovery of template files under a root directory."""

import os
from pathlib import Path, PurePosixPath
from typing import Iterator, List, Optional

from ..config import AnalysisConfig
from ..exceptions import FileAccessError, InvalidPathError
from ..logging_config import get_logger
from .models import TemplateFile

logger = get_logger(__name__)


def should_skip_file(relative_path: str, exclude_patterns: List[str]) -> bool:
    """
    Check if a file should be skipped based on exclusion patterns.

    Args:
        relative_path: "/"-separated path relative to the scan root
        exclude_patterns: List of glob patterns to exclude

    Returns:
        True if file should be skipped
    """
    path = PurePosixPath(relative_path)
    for pattern in exclude_patterns:
        # "dir/*" also excludes anything nested below dir
        if path.match(pattern) or relative_path.startswith(pattern.rstrip("*").rstrip("/") + "/"):
            return True
    return False


class TemplateFinder:
    """Walks a directory tree and yields template files in a stable order."""

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or AnalysisConfig()
        self._extensions = tuple(ext.lower() for ext in self.config.extensions)

    def find(self, root: Path) -> List[TemplateFile]:
        """
        Find all template files below root, sorted by relative path.

        Args:
            root: Directory to scan (a single file is accepted too)

        Returns:
            Discovered templates

        Raises:
            InvalidPathError: If root does not exist
            FileAccessError: If the directory cannot be listed
        """
        root = Path(root)
        if not root.exists():
            raise InvalidPathError(root, "Path does not exist")

        if root.is_file():
            return [TemplateFile(path=root.resolve(), relative_path=root.name)]

        root = root.resolve()
        files = sorted(self._walk(root), key=lambda f: f.relative_path)
        logger.debug("Discovered %d template(s) under %s", len(files), root)
        return files

    def _walk(self, root: Path) -> Iterator[TemplateFile]:
        def on_error(error: OSError) -> None:
            raise FileAccessError(Path(error.filename or root), f"Directory scan failed: {error}")

        for dirpath, dirnames, filenames in os.walk(
            root, onerror=on_error, followlinks=self.config.follow_symlinks
        ):
            if not self.config.allow_hidden_files:
                dirnames[:] = [d for d in dirnames if not d.startswith(".")]

            for name in filenames:
                path = Path(dirpath) / name
                relative = path.relative_to(root).as_posix()
                if self._accepts(path, relative):
                    yield TemplateFile(path=path, relative_path=relative)

    def _accepts(self, path: Path, relative: str) -> bool:
        name = path.name
        if not self.config.allow_hidden_files and name.startswith("."):
            return False
        if not name.lower().endswith(self._extensions):
            return False
        if should_skip_file(relative, self.config.exclude_patterns):
            return False
        if path.is_symlink() and not self.config.follow_symlinks:
            return False
        try:
            size = path.stat().st_size
        except OSError as e:
            logger.warning("Skipping %s: %s", relative, e)
            return False
        if size > self.config.max_file_size_bytes:
            logger.info("Skipping %s: larger than %.1f MB", relative, self.config.max_file_size_mb)
            return False
        return True
