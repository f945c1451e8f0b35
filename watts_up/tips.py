# pylint: disable=line-too-long, missing-module-docstring

from typing import Protocol, Sequence, TypeVar

T = TypeVar("T")

ENERGY_TIPS = (
    "Replace incandescent bulbs with LED bulbs to save up to 80% energy on lighting.",
    "Unplug devices when not in use to eliminate 'phantom' energy use.",
    "Use smart power strips to automatically cut power to devices in standby mode.",
    "Set your refrigerator temperature to 38°F and freezer to 0°F for optimal efficiency.",
    "Run full loads in dishwashers and washing machines to maximize efficiency.",
    "Use cold water for laundry when possible to save on water heating costs.",
    "Clean or replace AC filters regularly to improve efficiency.",
    "Use ceiling fans to supplement AC and raise the thermostat by 4°F without loss of comfort.",
    "Enable power management settings on computers and monitors.",
    "Air dry dishes and clothes when possible instead of using machine drying.",
)


class RandomSource(Protocol):  # pylint: disable=too-few-public-methods
    """ Anything that can pick an element from a sequence, such as an instance of random.Random. """
    def choice(self, seq: Sequence[T]) -> T:
        ...


def random_tip(rng: RandomSource, tips: Sequence[str] = ENERGY_TIPS) -> str:
    """
    Pick an energy-saving tip.
    :param rng: The source of randomness; inject a seeded random.Random to get a repeatable selection.
    :param tips: The tips to choose from.
    :return: One of the given tips.
    """
    if not tips:
        raise ValueError("at least one tip is required")
    return rng.choice(tips)
