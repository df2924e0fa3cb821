"""
Key-value storage adapters.

``InMemoryKeyValueStorage`` keeps values for the life of the process (tests,
throwaway boards). ``JsonFileKeyValueStorage`` keeps one file per key in a
directory, the on-disk equivalent of browser local storage.
"""

import os
import re
import tempfile
from pathlib import Path

from workboard.core.observability import get_logger
from workboard.domain.scheduling.repositories.key_value_storage import KeyValueStorage
from workboard.domain.shared.exceptions import StorageError

logger = get_logger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class InMemoryKeyValueStorage(KeyValueStorage):
    """Process-local storage backed by a dict."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def load(self, key: str) -> str | None:
        return self._values.get(key)

    def save(self, key: str, value: str) -> None:
        self._values[key] = value

    def keys(self) -> list[str]:
        return sorted(self._values)


class JsonFileKeyValueStorage(KeyValueStorage):
    """
    Directory-backed storage: each key is written to ``<directory>/<key>.json``.

    Writes go to a temporary file that is renamed over the target, so a
    crash mid-write leaves the previous value intact.
    """

    def __init__(self, directory: Path | str) -> None:
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise StorageError(key, "key may only contain letters, digits, '.', '_' and '-'")
        return self._directory / f"{key}.json"

    def load(self, key: str) -> str | None:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(key, str(e)) from e

    def save(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._directory, prefix=f".{key}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(key, str(e)) from e

        logger.debug("storage_saved", key=key, path=str(path), size=len(value))
