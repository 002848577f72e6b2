"""File emission scoped to a project root.

``FileWriter`` materialises relative paths under a fixed root directory,
creating parent directories on demand.  Paths that would land outside the
root (absolute paths, ``..`` traversal) are rejected before anything touches
the filesystem.  Writes are never undone: a later failure leaves earlier
files in place.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from archigen.errors import FileWriteError, PathTraversalError


class FileWriter:
    """Writes files and directories under a single project root."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)
        self._written: list[Path] = []

    @property
    def written(self) -> tuple[Path, ...]:
        """Every file written so far, in write order."""
        return tuple(self._written)

    # -- Path resolution ---------------------------------------------------

    def resolve(self, relative_path: str | Path) -> Path:
        """Map *relative_path* onto the root, rejecting escapes."""
        rel = PurePosixPath(Path(relative_path).as_posix())
        if rel.is_absolute() or Path(relative_path).is_absolute():
            raise PathTraversalError(relative_path, self.root)
        if ".." in rel.parts:
            raise PathTraversalError(relative_path, self.root)

        target = self.root.joinpath(*rel.parts)
        root_resolved = self.root.resolve()
        if not target.resolve().is_relative_to(root_resolved):
            # A symlink inside the tree pointing elsewhere.
            raise PathTraversalError(relative_path, self.root)
        return target

    # -- Writing -----------------------------------------------------------

    def ensure_dir(self, relative_path: str | Path) -> Path:
        """Create a directory (and parents) under the root."""
        target = self.resolve(relative_path)
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FileWriteError(target, exc.strerror or str(exc)) from exc
        return target

    def write(self, relative_path: str | Path, content: str | bytes) -> Path:
        """Write *content* to *relative_path*, overwriting any existing file.

        Parent directories are created automatically.  Returns the absolute
        output path.
        """
        target = self.resolve(relative_path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                target.write_bytes(content)
            else:
                with target.open("w", encoding="utf-8", newline="\n") as fh:
                    fh.write(content)
        except OSError as exc:
            raise FileWriteError(target, exc.strerror or str(exc)) from exc
        self._written.append(target)
        return target
