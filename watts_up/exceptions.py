# pylint: disable=line-too-long, missing-module-docstring, missing-class-docstring)

from typing import Any, Optional

from dacite import DaciteError


class WattsUpError(Exception):  # base class to simplify bulk error handling
    pass


class InvalidEntryInputError(WattsUpError):  # the watts or hours of a new entry cannot be interpreted as a valid number
    def __init__(self, field: str, value: Any):
        self.field = field
        self.value = value
        super().__init__()

    def __str__(self):
        return f"InvalidEntryInputError({self.field}={self.value!r})"


class MalformedStateError(WattsUpError):  # the persisted ledger could not be parsed
    def __init__(self, error: Optional[Exception] = None):
        self.upstream_error = error
        super().__init__()

    def __str__(self):
        return "MalformedStateError"


class StorageError(WattsUpError):  # the backing file of a store could not be read or written
    def __init__(self, error: OSError):
        self.upstream_error = error
        super().__init__()

    def __str__(self):
        return "StorageError"
