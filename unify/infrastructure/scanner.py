"""File tree scanner feeding the asset index."""

from __future__ import annotations

import fnmatch
import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from unify.settings import normalize_extension

logger = logging.getLogger(__name__)


class TreeScanner:
    """Walks root directories and yields asset files in deterministic order.

    Symlink policy: do not follow symlinked directories and skip symlinked files.
    """

    def __init__(
        self,
        roots: list[Path],
        extensions: Iterable[str] | None = None,
        exclude_patterns: list[str] | None = None,
        ignore_hidden: bool = True,
    ) -> None:
        """Initialize scanner.

        Args:
            roots: List of root directories to scan
            extensions: File extensions to include (default: every file)
            exclude_patterns: List of fnmatch patterns to exclude
            ignore_hidden: Skip files and directories whose name starts with "."
        """
        self.roots = roots
        self.extensions = {normalize_extension(ext) for ext in extensions or ()}
        self.exclude_patterns = exclude_patterns or []
        self.ignore_hidden = ignore_hidden

    def iter_files(self) -> Iterator[Path]:
        """Yield every included file under the roots.

        Missing roots are skipped.
        """
        for root in self.roots:
            if not root.is_dir():
                logger.debug("Skipping missing root %s", root)
                continue

            for dirpath, dirnames, filenames in os.walk(root, followlinks=False):
                if self.ignore_hidden:
                    dirnames[:] = [name for name in dirnames if not name.startswith(".")]
                dirnames.sort()
                directory = Path(dirpath)

                for name in sorted(filenames):
                    path = directory / name
                    if path.is_symlink() or not path.is_file():
                        continue
                    if self._should_include(path):
                        yield path
                    else:
                        logger.debug("Skipping %s", path)

    def _should_include(self, path: Path) -> bool:
        """Check if file should be included based on name, extension and exclude patterns."""
        if self.ignore_hidden and path.name.startswith("."):
            return False
        if self.extensions and path.suffix.lower() not in self.extensions:
            return False

        rel = path.as_posix()
        for pattern in self.exclude_patterns:
            if fnmatch.fnmatch(rel, pattern) or fnmatch.fnmatch(path.name, pattern):
                return False

        return True
