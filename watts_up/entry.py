# pylint: disable=line-too-long, missing-module-docstring

from dataclasses import dataclass


@dataclass(frozen=True)
class Entry:
    """ A single appliance usage record with its daily energy use (in kWh) fixed at creation. """
    id: int  # pylint: disable=invalid-name
    name: str  # display label, either free-form or taken from the catalogue
    watts: float  # the power draw in watt
    hours: float  # the daily usage duration, expected in (0, 24] but not enforced
    kwh: float  # watts * hours / 1000, never recalculated

    @classmethod
    def create(cls, *, entry_id: int, name: str, watts: float, hours: float) -> "Entry":
        """ Create an entry and derive its daily energy use from the power draw and the hours of use. """
        return cls(entry_id, name, watts, hours, watts * hours / 1_000)
