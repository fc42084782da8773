"""Source tree scanning."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from configflow.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_EXTENSIONS = (".js", ".jsx", ".ts", ".tsx", ".mjs", ".py", ".rb", ".java", ".go")

DEFAULT_IGNORE_DIRS = frozenset(
    {
        "node_modules",
        ".git",
        "dist",
        "build",
        "zig-cache",
        "zig-out",
        ".next",
        "__pycache__",
        "venv",
        ".venv",
        "vendor",
        "target",
        "test",
        "tests",
        "__tests__",
        "spec",
        "specs",
        "e2e",
        "integration",
        "fixtures",
    }
)

DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024


@dataclass(frozen=True)
class ScanOptions:
    """Options controlling which files a scan returns.

    ``max_depth`` counts directories below the root (the root itself is
    depth 0); ``None`` means unlimited.
    """

    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    ignore_dirs: frozenset[str] = field(default_factory=lambda: DEFAULT_IGNORE_DIRS)
    follow_symlinks: bool = False
    max_depth: int | None = None

    def matches(self, name: str) -> bool:
        """Check whether a file name ends with an allowed extension."""
        return name.endswith(self.extensions)


class Scanner:
    """Walks a directory tree collecting candidate source files.

    Example:
        scanner = Scanner(ScanOptions(extensions=(".py",)))
        for path in scanner.scan("/srv/app"):
            print(path)
    """

    def __init__(self, options: ScanOptions | None = None) -> None:
        self.options = options or ScanOptions()

    def scan(self, root: Path | str) -> list[Path]:
        """Return every matching file under ``root``.

        Unreadable or vanished directories are skipped. Ignored directory
        names are pruned at any depth.
        """
        root_path = Path(root).absolute()
        found: list[Path] = []
        visited: set[Path] = set()
        self._walk(root_path, 0, found, visited)
        return found

    def _walk(self, directory: Path, depth: int, found: list[Path], visited: set[Path]) -> None:
        if self.options.max_depth is not None and depth > self.options.max_depth:
            return

        if self.options.follow_symlinks:
            # Symlinked directories can form cycles
            try:
                real = directory.resolve()
            except OSError:
                return
            if real in visited:
                return
            visited.add(real)

        try:
            entries = sorted(directory.iterdir(), key=lambda p: p.name)
        except (PermissionError, FileNotFoundError, NotADirectoryError) as e:
            logger.debug("Skipping unreadable directory %s: %s", directory, e)
            return
        except OSError as e:
            logger.debug("Skipping directory %s: %s", directory, e)
            return

        for entry in entries:
            if entry.is_symlink() and not self.options.follow_symlinks:
                continue
            # is_dir/is_file follow links, so a followed symlink is
            # classified by its target
            try:
                is_dir = entry.is_dir()
                is_file = entry.is_file()
            except OSError:
                continue

            if is_dir:
                if entry.name in self.options.ignore_dirs:
                    continue
                self._walk(entry, depth + 1, found, visited)
            elif is_file and self.options.matches(entry.name):
                found.append(entry)


def scan_directory(root: Path | str, options: ScanOptions | None = None) -> list[Path]:
    """Convenience wrapper around :class:`Scanner`."""
    return Scanner(options).scan(root)
