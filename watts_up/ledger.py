# pylint: disable=line-too-long, missing-module-docstring

# The ledger is persisted as a JSON array of objects with the keys id, name, watts, hours and kWh, which is the layout
# used by the original browser application. There is no schema version; changing the layout breaks stored data.
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple, Union, Any

import orjson as json
from dacite import Config, from_dict

from watts_up.efficiency import REFERENCE_KWH, EfficiencyBand, efficiency_band
from watts_up.entry import Entry
from watts_up.exceptions import DaciteError, InvalidEntryInputError, MalformedStateError
from watts_up.storage import STORAGE_KEY, KeyValueStore
from watts_up.utilities import Number, non_negative, timestamp_ms

log = logging.getLogger(__name__)  # get a module-level logger


@dataclass
class _StoredEntry:
    # pylint: disable=invalid-name
    id: int
    name: str
    watts: float
    hours: float
    kWh: float


def _stored_id(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"expected an integer id, got {value!r}")
    return value


def _stored_number(value: Any) -> float:
    # only JSON numbers are accepted; strings, booleans and nulls mark the stored data as malformed
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValueError(f"expected a finite number, got {value!r}")
    return float(value)


_STORED_CONFIG = Config(type_hooks={int: _stored_id, float: _stored_number})


class UsageLedger:
    """ The ordered collection of appliance usage entries for a session, and the aggregates derived from it. """

    def __init__(self, entries: Iterable[Entry] = (), *,
                 reference_kwh: Number = REFERENCE_KWH, hours_fallback: Optional[Number] = None):
        """
        Create a ledger, either empty or holding previously recorded entries.
        :param entries: The entries to start with, in display order.
        :param reference_kwh: The daily consumption in kWh that usage is compared against; must be strictly positive.
        :param hours_fallback: The hours of use to assume when the given hours are invalid.
                               Must be a finite number of zero or more.
                               When None, invalid hours are rejected with an InvalidEntryInputError instead.
        """
        if reference_kwh <= 0:
            raise ValueError("the reference consumption should be strictly positive")
        self.reference_kwh = reference_kwh
        fallback = None if hours_fallback is None else non_negative(hours_fallback)
        if hours_fallback is not None and fallback is None:
            raise ValueError("the fallback hours should be a finite number of zero or more")
        self.hours_fallback = fallback
        self._entries: List[Entry] = list(entries)
        self._last_id = max((entry.id for entry in self._entries), default=0)

    # MARK: container access

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(tuple(self._entries))

    def __repr__(self) -> str:
        return f"UsageLedger(entries={len(self._entries)}, total_kwh={self.total_kwh():.2f})"

    @property
    def entries(self) -> Tuple[Entry, ...]:
        """ A snapshot of all entries in insertion order. """
        return tuple(self._entries)

    @property
    def is_empty(self) -> bool:
        """ Whether no entries have been recorded, in which case the aggregates carry no meaning. """
        return not self._entries

    # MARK: support functions

    def _next_id(self) -> int:
        # millisecond timestamps, moved forward when several entries are created within the same millisecond
        self._last_id = max(timestamp_ms(), self._last_id + 1)
        return self._last_id

    def _hours(self, hours: Any) -> float:
        value = non_negative(hours)
        if value is not None:
            return value
        if self.hours_fallback is None:
            raise InvalidEntryInputError("hours", hours)
        log.info("unable to interpret %r as hours of use; assuming %s hours", hours, self.hours_fallback)
        return self.hours_fallback

    # MARK: mutation

    def append(self, name: str, watts: Union[Number, str], hours: Union[Number, str, None]) -> Entry:
        """
        Record an appliance and its daily use.
        :param name: The label of the appliance, for display only.
        :param watts: The power draw in watt, as a number or a numeric string.
        :param hours: The hours of use per day, as a number or a numeric string.
        :return: The new entry, with its energy use in kWh computed and a fresh unique id.
        :raises:
            InvalidEntryInputError: the watts are not a finite number of zero or more, or the hours are not and no
                                    fallback is configured
            InvalidEntryInputError: the resulting energy use is too large to be represented
        >>> ledger = UsageLedger()
        >>> ledger.append("Refrigerator", 150, 24).kwh
        3.6
        """
        power = non_negative(watts)
        if power is None:
            raise InvalidEntryInputError("watts", watts)
        duration = self._hours(hours)
        if not math.isfinite(power * duration / 1_000):  # the energy use could not be stored or restored
            raise InvalidEntryInputError("watts", watts)
        entry = Entry.create(entry_id=self._next_id(), name=name, watts=power, hours=duration)
        self._entries.append(entry)
        log.debug("added %s (%s W for %s h, %.3f kWh) with id %d", entry.name, entry.watts, entry.hours, entry.kwh,
                  entry.id)
        return entry

    def remove(self, entry_id: int) -> None:
        """
        Remove the entry with the given id. Removing an id that is not in the ledger has no effect.
        :param entry_id: The id of the entry to remove.
        """
        remaining = [entry for entry in self._entries if entry.id != entry_id]
        if len(remaining) == len(self._entries):
            log.debug("no entry with id %s to remove", entry_id)
            return
        self._entries = remaining
        log.debug("removed the entry with id %s", entry_id)

    # MARK: aggregates

    def total_kwh(self) -> float:
        """ The total daily energy use in kWh of all entries; 0 for an empty ledger. """
        return sum((entry.kwh for entry in self._entries), 0.0)

    def comparison_percentage(self) -> float:
        """ The total daily energy use as a percentage of the reference consumption; 0 for an empty ledger. """
        return self.total_kwh() / self.reference_kwh * 100

    def efficiency_band(self, percentage: Optional[float] = None) -> EfficiencyBand:
        """
        Classify a comparison percentage.
        :param percentage: The percentage to classify; defaults to the comparison percentage of this ledger.
        :return: The efficiency band the percentage falls in.
        """
        return efficiency_band(self.comparison_percentage() if percentage is None else percentage)

    # MARK: persistence

    def serialize(self) -> str:
        """ Encode all entries, in order, as a JSON array that `deserialize` can restore. """
        return json.dumps([
            {"id": entry.id, "name": entry.name, "watts": entry.watts, "hours": entry.hours, "kWh": entry.kwh}
            for entry in self._entries
        ]).decode("utf-8")

    @classmethod
    def deserialize(cls, data: Union[str, bytes], **config) -> UsageLedger:
        """
        Restore a ledger from the output of `serialize`.
        :param data: The serialized entries.
        :param config: Keyword arguments passed on to the constructor, e.g. `reference_kwh`.
        :return: A ledger holding the restored entries in their original order.
        :raises:
            MalformedStateError: the data is not valid JSON, is not an array, or holds an invalid entry
        """
        if not isinstance(data, (str, bytes, bytearray)):
            raise MalformedStateError
        try:
            json_data = json.loads(data)
        except json.JSONDecodeError as exc:
            raise MalformedStateError(exc) from exc
        if not isinstance(json_data, list):
            raise MalformedStateError

        entries: List[Entry] = []
        for element in json_data:
            if not isinstance(element, dict):
                raise MalformedStateError
            try:  # pylint: disable=loop-try-except-usage
                stored = from_dict(data_class=_StoredEntry, data=element, config=_STORED_CONFIG)
            except (DaciteError, ValueError, TypeError) as exc:
                raise MalformedStateError(exc) from exc
            entries.append(Entry(stored.id, stored.name, stored.watts, stored.hours, stored.kWh))
        return cls(entries, **config)

    def save(self, store: KeyValueStore, key: str = STORAGE_KEY) -> None:
        """
        Persist all entries to a key-value store.
        :param store: The store to write to.
        :param key: The key to store the entries under.
        """
        store.set(key, self.serialize())
        log.debug("saved %d entries under %s", len(self._entries), key)

    @classmethod
    def load(cls, store: KeyValueStore, key: str = STORAGE_KEY, **config) -> UsageLedger:
        """
        Restore a ledger from a key-value store. Missing or malformed data results in an empty ledger.
        :param store: The store to read from.
        :param key: The key the entries were stored under.
        :param config: Keyword arguments passed on to the constructor, e.g. `hours_fallback`.
        :return: The restored ledger, or an empty ledger when nothing usable was stored.
        """
        try:
            data = store.get(key)
            if not data:
                log.debug("nothing stored under %s; starting with an empty ledger", key)
                return cls(**config)
            ledger = cls.deserialize(data, **config)
        except MalformedStateError as exc:
            log.info("discarding malformed data stored under %s: %s", key, exc.upstream_error or exc)
            return cls(**config)
        log.debug("loaded %d entries from %s", len(ledger), key)
        return ledger
