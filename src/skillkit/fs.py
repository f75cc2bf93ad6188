"""In-memory filesystem primitives for skill trees."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

SKILL_FILENAME = "SKILL.md"


def normalize_rel_path(path: str) -> str:
    """Normalize and validate a relative path (posix separators, no '..')."""
    if not path:
        raise ValueError("path must be non-empty")
    p = Path(path)
    if p.is_absolute():
        raise ValueError("path must be relative")
    parts = list(p.parts)
    if any(part in ("..", ".", "") for part in parts):
        raise ValueError("path must not contain '.', '..', or empty segments")
    normalized = Path(*parts).as_posix().lstrip("/")
    if not normalized or normalized == ".":
        raise ValueError("path must not resolve to root")
    return normalized


@dataclass(slots=True)
class File:
    """A file node in an in-memory filesystem."""

    content: bytes

    def read_text(self, *, encoding: str = "utf-8") -> str:
        return self.content.decode(encoding)


@dataclass(slots=True)
class Directory:
    """A directory node in an in-memory filesystem."""

    entries: dict[str, Directory | File] = field(default_factory=dict)


class SkillsFS:
    """A minimal, filesystem-like container for a skill tree.

    Paths are always relative to the FS root and use POSIX separators. When the
    tree was read from disk, `source_path()` maps them back to real paths.
    """

    def __init__(self, root: Directory | None = None, *, origin: Path | None = None) -> None:
        self._root = root or Directory()
        self._origin = origin

    @property
    def root(self) -> Directory:
        return self._root

    @property
    def origin(self) -> Path | None:
        return self._origin

    def source_path(self, path: str) -> str:
        """Return the on-disk path for `path`, or `path` itself for in-memory trees."""
        if self._origin is None:
            return path
        return str(self._origin / path) if path else str(self._origin)

    def exists(self, path: str) -> bool:
        try:
            self._get_node(path)
        except KeyError:
            return False
        return True

    def is_file(self, path: str) -> bool:
        try:
            return isinstance(self._get_node(path), File)
        except KeyError:
            return False

    def is_dir(self, path: str) -> bool:
        try:
            return isinstance(self._get_node(path), Directory)
        except KeyError:
            return False

    def read_bytes(self, path: str) -> bytes:
        node = self._get_node(path)
        if not isinstance(node, File):
            raise IsADirectoryError(path)
        return node.content

    def read_text(self, path: str, *, encoding: str = "utf-8") -> str:
        return self.read_bytes(path).decode(encoding)

    def write_bytes(self, path: str, content: bytes) -> None:
        normalized = normalize_rel_path(path)
        parent, name = self._split_parent(normalized)
        directory = self._mkdirs(parent)
        directory.entries[name] = File(content=content)

    def write_text(self, path: str, text: str, *, encoding: str = "utf-8") -> None:
        self.write_bytes(path, text.encode(encoding))

    def listdir(self, path: str) -> list[str]:
        node = self._get_node(path)
        if not isinstance(node, Directory):
            raise NotADirectoryError(path)
        return sorted(node.entries.keys())

    def iter_files(self) -> Iterator[tuple[str, File]]:
        """Yield (path, File) for all files in the filesystem, sorted by path."""

        def walk(prefix: str, directory: Directory) -> Iterator[tuple[str, File]]:
            for name in sorted(directory.entries):
                child = directory.entries[name]
                child_path = f"{prefix}/{name}" if prefix else name
                if isinstance(child, File):
                    yield child_path, child
                else:
                    yield from walk(child_path, child)

        yield from walk("", self._root)

    def iter_skill_dirs(self, filename: str = SKILL_FILENAME) -> Iterator[str]:
        """Yield directories that contain a skill file, the root included as ''."""

        def walk(prefix: str, directory: Directory) -> Iterator[str]:
            if isinstance(directory.entries.get(filename), File):
                yield prefix
            for name in sorted(directory.entries):
                child = directory.entries[name]
                if isinstance(child, Directory):
                    child_path = f"{prefix}/{name}" if prefix else name
                    yield from walk(child_path, child)

        yield from walk("", self._root)

    @classmethod
    def from_disk(
        cls,
        root: Path,
        *,
        filename: str | None = None,
        include_hidden: bool = False,
    ) -> SkillsFS:
        """Load a directory tree into an in-memory filesystem.

        With `filename` set, only files with that exact name are read.
        """
        root = Path(root)
        if not root.exists() or not root.is_dir():
            raise ValueError(f"root must be an existing directory: {root}")

        fs = cls(origin=root)
        pattern = filename or "*"
        for path in sorted(root.rglob(pattern)):
            if path.is_dir():
                continue
            relative = path.relative_to(root)
            rel = relative.as_posix()
            if not include_hidden and any(part.startswith(".") for part in relative.parts):
                continue
            fs.write_bytes(rel, path.read_bytes())
        return fs

    def _split_parent(self, normalized: str) -> tuple[str, str]:
        if "/" not in normalized:
            return "", normalized
        parent, name = normalized.rsplit("/", 1)
        return parent, name

    def _mkdirs(self, path: str) -> Directory:
        if not path:
            return self._root
        normalized = normalize_rel_path(path)
        current: Directory = self._root
        for segment in normalized.split("/"):
            existing = current.entries.get(segment)
            if existing is None:
                child = Directory()
                current.entries[segment] = child
                current = child
                continue
            if isinstance(existing, File):
                raise NotADirectoryError(f"{segment} is a file")
            current = existing
        return current

    def _get_node(self, path: str) -> Directory | File:
        if path == "":
            return self._root
        normalized = normalize_rel_path(path)
        current: Directory | File = self._root
        for segment in normalized.split("/"):
            if not isinstance(current, Directory):
                raise KeyError(path)
            current = current.entries[segment]
        return current


__all__ = ["Directory", "File", "SKILL_FILENAME", "SkillsFS", "normalize_rel_path"]
