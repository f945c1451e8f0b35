# pylint: disable=line-too-long, missing-module-docstring

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional, Union

import pendulum

from watts_up.catalog import DEFAULT_APPLIANCE, default_watts
from watts_up.efficiency import EfficiencyBand
from watts_up.entry import Entry
from watts_up.ledger import UsageLedger
from watts_up.storage import STORAGE_KEY, KeyValueStore
from watts_up.tips import RandomSource, random_tip
from watts_up.utilities import Number

log = logging.getLogger(__name__)  # get a module-level logger

DEFAULT_HOURS = 24  # the hours of use offered for a new appliance, also assumed when the given hours are invalid


@dataclass
class UsageSummary:
    """ The aggregates shown to the user, together with the reference they are compared against. """
    entries: int  # the number of recorded appliances
    total_kwh: float  # the total daily energy use in kWh
    percentage: float  # the total as a percentage of the reference
    band: EfficiencyBand
    reference_kwh: float  # the reference daily energy use in kWh


class UsageSession:
    """ The state behind the energy calculator for a single user: the ledger, the saved indicator, and the tip. """

    def __init__(self, store: KeyValueStore, *, key: str = STORAGE_KEY, rng: Optional[RandomSource] = None,
                 saved_seconds: int = 3, hours_fallback: Optional[Number] = DEFAULT_HOURS, **config):
        """
        Start a session, restoring the entries previously saved in the store.
        :param store: The key-value store the ledger is loaded from and saved to.
        :param key: The key the ledger is stored under.
        :param rng: The source of randomness for the tips; defaults to a fresh instance of random.Random.
        :param saved_seconds: How long the saved indicator stays on after saving.
        :param hours_fallback: The hours of use assumed for invalid input, or None to reject invalid input.
        :param config: Any further keyword arguments for the ledger, e.g. `reference_kwh`.
        """
        self.store = store
        self.key = key
        self.rng = rng if rng is not None else random.Random()
        self.saved_seconds = saved_seconds
        self.ledger = UsageLedger.load(store, key, hours_fallback=hours_fallback, **config)
        self.tip = random_tip(self.rng)
        self._saved_until: Optional[pendulum.DateTime] = None

    # MARK: calculated properties for easy access

    @property
    def saved(self) -> bool:
        """ Whether the entries were saved recently and have not changed since. """
        return self._saved_until is not None and pendulum.now() < self._saved_until

    @property
    def saved_until(self) -> Optional[pendulum.DateTime]:
        """ When the saved indicator turns off, or None when it is off. """
        return self._saved_until if self.saved else None

    # MARK: public functions

    @staticmethod
    def select_appliance(name: str = DEFAULT_APPLIANCE) -> int:
        """ The wattage to prefill when the user selects an appliance. """
        return default_watts(name)

    def add_appliance(self, name: str, watts: Union[Number, str, None] = None,
                      hours: Union[Number, str, None] = DEFAULT_HOURS) -> Entry:
        """
        Add an appliance to the ledger.
        :param name: The label of the appliance.
        :param watts: The power draw in watt; defaults to the wattage listed in the catalogue for `name`.
        :param hours: The hours of use per day.
        :return: The new entry.
        """
        entry = self.ledger.append(name, default_watts(name) if watts is None else watts, hours)
        self._saved_until = None
        return entry

    def delete(self, entry_id: int) -> None:
        """ Remove an appliance from the ledger; unknown ids are ignored. """
        self.ledger.remove(entry_id)
        self._saved_until = None

    def save(self) -> pendulum.DateTime:
        """
        Save the ledger to the store and switch on the saved indicator.
        :return: When the saved indicator switches off again.
        """
        self.ledger.save(self.store, self.key)
        self._saved_until = pendulum.now().add(seconds=self.saved_seconds)
        log.debug("session saved; indicator on until %s", self._saved_until.isoformat())
        return self._saved_until

    def new_tip(self) -> str:
        """ Pick a new energy-saving tip. """
        self.tip = random_tip(self.rng)
        return self.tip

    def summary(self) -> UsageSummary:
        """ The aggregates of the current ledger. """
        percentage = self.ledger.comparison_percentage()
        return UsageSummary(entries=len(self.ledger), total_kwh=self.ledger.total_kwh(), percentage=percentage,
                            band=self.ledger.efficiency_band(percentage),
                            reference_kwh=float(self.ledger.reference_kwh))
