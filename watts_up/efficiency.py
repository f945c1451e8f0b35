# pylint: disable=line-too-long, missing-module-docstring

from enum import Enum

REFERENCE_KWH = 30  # the U.S. average daily household electricity consumption in kWh


class EfficiencyBand(Enum):
    """ Coarse classification of the daily usage compared to the reference value, from best to worst. """
    EXCELLENT = "Excellent! Your usage is significantly below average."
    GOOD = "Good! Your usage is below average."
    AVERAGE = "Your usage is about average."
    ABOVE_AVERAGE = "Your usage is above average. Consider energy-saving measures."

    @property
    def message(self) -> str:
        """ The message shown to the user for this band. """
        return self.value


def efficiency_band(percentage: float) -> EfficiencyBand:
    """
    Classify a comparison percentage; every upper bound is inclusive.
    :param percentage: The daily usage expressed as a percentage of the reference value.
    :return: EXCELLENT up to 50%, GOOD up to 80%, AVERAGE up to 120%, and ABOVE_AVERAGE otherwise.
    """
    if percentage <= 50:
        return EfficiencyBand.EXCELLENT
    if percentage <= 80:
        return EfficiencyBand.GOOD
    if percentage <= 120:
        return EfficiencyBand.AVERAGE
    return EfficiencyBand.ABOVE_AVERAGE
