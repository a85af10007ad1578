"""Filesystem backend implementing IFileStore under a root directory."""

from __future__ import annotations

from pathlib import Path

from hrcore.core.exceptions import StorageError


class LocalFileStore:
    """IFileStore over a local directory. Paths are relative to root."""

    def __init__(self, root: str | Path = ".") -> None:
        self._root = Path(root)

    def _resolve(self, path: str) -> Path:
        return self._root / path

    def read(self, path: str) -> bytes:
        try:
            return self._resolve(path).read_bytes()
        except OSError as exc:
            raise StorageError(f"Local read failed for {path!r}: {exc}") from exc

    def write(self, path: str, data: bytes, content_type: str = "application/octet-stream") -> str:
        target = self._resolve(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            raise StorageError(f"Local write failed for {path!r}: {exc}") from exc
        return path

    def move(self, src: str, dst: str) -> None:
        target = self._resolve(dst)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            self._resolve(src).replace(target)
        except OSError as exc:
            raise StorageError(f"Local move {src!r} -> {dst!r} failed: {exc}") from exc

    def list_files(self, prefix: str) -> list[str]:
        if not self._root.exists():
            return []
        keys = (p.relative_to(self._root).as_posix() for p in self._root.rglob("*") if p.is_file())
        return sorted(k for k in keys if k.startswith(prefix))
