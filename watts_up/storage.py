# pylint: disable=line-too-long, missing-module-docstring

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

import orjson as json

from watts_up.exceptions import StorageError, MalformedStateError

log = logging.getLogger(__name__)  # get a module-level logger

STORAGE_KEY = "wattsUpData"  # the single key under which the ledger is stored


class KeyValueStore(Protocol):
    """ A local, single-writer string store addressed by key. """

    def get(self, key: str) -> Optional[str]:
        """ The value stored under `key`, or None when nothing was stored. """

    def set(self, key: str, value: str) -> None:
        """ Store `value` under `key`, replacing any previous value. """


class MemoryStore:
    """ A store that only lives as long as the process, convenient for tests and embedding. """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._values: Dict[str, str] = dict(initial) if initial else {}

    def get(self, key: str) -> Optional[str]:  # pylint: disable=missing-function-docstring
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:  # pylint: disable=missing-function-docstring
        self._values[key] = value


class FileStore:
    """ A store kept on disk as a single JSON object mapping keys to string values. """

    def __init__(self, path: Union[str, Path]):
        """
        Link a store to a file. The file is only created on the first write.
        :param path: The location of the JSON document; its parent directory must exist.
        """
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        try:
            content = self.path.read_bytes()
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise StorageError(exc) from exc
        if not content:
            return {}
        try:
            values = json.loads(content)
        except json.JSONDecodeError as exc:
            raise MalformedStateError(exc) from exc
        if not isinstance(values, dict):
            raise MalformedStateError
        return values

    def get(self, key: str) -> Optional[str]:
        """
        Read a value from the file.
        :param key: The key to look up.
        :return: The stored value, or None if the file or the key does not exist.
        :raises:
            StorageError: the file exists but could not be read
            MalformedStateError: the file does not contain a JSON object
        """
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        """
        Write a value to the file, keeping the values stored under other keys.
        :param key: The key to store the value under.
        :param value: The value to store.
        :raises:
            StorageError: the file could not be read or written
        """
        try:
            values = self._read()
        except MalformedStateError:
            log.info("discarding the unreadable content of %s", self.path)
            values = {}
        values[key] = value
        try:
            self.path.write_bytes(json.dumps(values))
        except OSError as exc:
            raise StorageError(exc) from exc
        log.debug("stored %d characters under %s in %s", len(value), key, self.path)
