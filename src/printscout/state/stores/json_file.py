"""JSON-file RegistryStore (persistent, file-based)."""

from __future__ import annotations

import os
import tempfile
import threading
from collections.abc import Sequence
from pathlib import Path

from printscout.errors import RegistryLoadError, RegistrySaveError
from printscout.models.entities import Endpoint
from printscout.state.store import parse_registry_document, render_registry_document

REGISTRY_FILENAME = "ManualDiscovery.json"


class JSONFileRegistryStore:
    """Registry store backed by a single JSON document on disk.

    ``save()`` writes to a temporary file in the same directory and moves it
    over the previous document with ``os.replace``, so readers see either
    the old or the new contents, never a partial write.

    Args:
        path: Path of the JSON document. Parent directories are created on save.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def location(self) -> str:
        return str(self._path)

    def load(self) -> list[Endpoint]:
        with self._lock:
            if not self._path.exists():
                return []
            try:
                text = self._path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise RegistryLoadError(self.location, f"cannot read file: {exc}") from exc
        return parse_registry_document(text, self.location)

    def save(self, endpoints: Sequence[Endpoint]) -> None:
        rendered = render_registry_document(endpoints)
        with self._lock:
            tmp_name: str | None = None
            try:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                fd, tmp_name = tempfile.mkstemp(
                    prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
                )
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(rendered)
                    handle.flush()
                    os.fsync(handle.fileno())
                os.replace(tmp_name, self._path)
                tmp_name = None
            except OSError as exc:
                raise RegistrySaveError(self.location, f"cannot write file: {exc}") from exc
            finally:
                if tmp_name is not None:
                    Path(tmp_name).unlink(missing_ok=True)


__all__ = ["JSONFileRegistryStore", "REGISTRY_FILENAME"]
