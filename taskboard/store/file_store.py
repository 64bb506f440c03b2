from __future__ import annotations

import os
import re
import tempfile
from pathlib import Path

from taskboard.errors import StoreError

from .interface import KeyValueStore

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class FileKeyValueStore(KeyValueStore):
    """Directory-backed store: one `{key}.json` file per slot.

    Writes land in a temp file next to the target and are renamed over it,
    so a crash mid-write leaves the previous snapshot intact.
    """

    def __init__(self, directory: str | Path) -> None:
        self._dir = Path(directory).expanduser()

    @property
    def directory(self) -> Path:
        return self._dir

    def path_for(self, key: str) -> Path:
        if not _SAFE_KEY.match(key) or key.startswith("."):
            raise ValueError(f"invalid store key: {key!r}")
        return self._dir / f"{key}.json"

    def get(self, key: str) -> bytes | None:
        path = self.path_for(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StoreError(f"cannot read {path}: {exc}") from exc

    def set(self, key: str, value: bytes) -> None:
        path = self.path_for(key)
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=self._dir)
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StoreError(f"cannot write {path}: {exc}") from exc


__all__ = ["FileKeyValueStore"]
