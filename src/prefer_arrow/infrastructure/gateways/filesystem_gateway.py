"""Filesystem Gateway - Infrastructure implementation of FileSystemProtocol."""

from pathlib import Path
from typing import Optional

from prefer_arrow.domain.constants import DECLARATION_FILE_SUFFIX, DEFAULT_EXCLUDED_DIRS
from prefer_arrow.domain.protocols import FileSystemProtocol


class FileSystemGateway(FileSystemProtocol):
    """Infrastructure implementation of FileSystemProtocol using pathlib."""

    def exists(self, path: str) -> bool:
        return Path(path).exists()

    def glob_source_files(
        self,
        path: str,
        extensions: tuple[str, ...],
        exclude: Optional[list[str]] = None,
    ) -> list[str]:
        """
        Get all source files with one of the given suffixes (recursive if directory).

        Skips .d.ts declaration files, node_modules/.git/dist/build directories and any
        path containing one of the exclude fragments.
        """
        path_obj = Path(path).resolve()
        if path_obj.is_dir():
            base = path_obj
            candidates = sorted(p for p in path_obj.rglob("*") if p.is_file())
        else:
            base = path_obj.parent
            candidates = [path_obj]
        fragments = exclude or []
        return [
            str(p)
            for p in candidates
            if self._is_source_file(p, extensions)
            and not self._is_excluded(p.relative_to(base), fragments)
        ]

    @staticmethod
    def _is_source_file(path: Path, extensions: tuple[str, ...]) -> bool:
        if path.name.endswith(DECLARATION_FILE_SUFFIX):
            return False
        return path.suffix.lower() in extensions

    @staticmethod
    def _is_excluded(relative: Path, fragments: list[str]) -> bool:
        """Directory names and fragments are matched below the searched root only."""
        if any(part in DEFAULT_EXCLUDED_DIRS for part in relative.parts[:-1]):
            return True
        posix = relative.as_posix()
        return any(fragment in posix for fragment in fragments)

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Read text content from a file."""
        return Path(path).read_text(encoding=encoding)

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file."""
        Path(path).write_text(content, encoding=encoding)
