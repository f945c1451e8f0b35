# pylint: disable=line-too-long, missing-module-docstring

from typing import Dict, List

# common appliances and their average power draw in watt, in the order they are offered to the user
APPLIANCES: Dict[str, int] = {
    "Refrigerator": 150,
    "AC/Heater": 1500,
    "Laptop": 50,
    "Desktop Computer": 200,
    "TV": 100,
    "Microwave": 1000,
    "Washing Machine": 500,
    "Dryer": 3000,
    "Light Bulb (LED)": 9,
    "Light Bulb (Incandescent)": 60,
    "Dishwasher": 1200,
    "Electric Oven": 2150,
    "Coffee Maker": 1000,
    "Toaster": 1100,
    "Hair Dryer": 1800,
    "Ceiling Fan": 75,
    "Router/Modem": 15,
    "Gaming Console": 150,
    "Phone Charger": 5,
    "Other": 0,
}

DEFAULT_APPLIANCE = "Refrigerator"


def appliance_names() -> List[str]:
    """ All appliance labels in catalogue order. """
    return list(APPLIANCES)


def default_watts(name: str) -> int:
    """
    Look up the wattage used to prefill the power field when an appliance is selected.
    :param name: The appliance label.
    :return: The average power draw of the appliance in watt, or 0 when the label is not in the catalogue.
    """
    return APPLIANCES.get(name, 0)
