import logging

from watts_up.catalog import APPLIANCES, appliance_names, default_watts
from watts_up.efficiency import REFERENCE_KWH, EfficiencyBand, efficiency_band
from watts_up.entry import Entry
from watts_up.exceptions import WattsUpError, InvalidEntryInputError, MalformedStateError, StorageError
from watts_up.ledger import UsageLedger
from watts_up.session import UsageSession, UsageSummary
from watts_up.storage import STORAGE_KEY, KeyValueStore, MemoryStore, FileStore
from watts_up.tips import ENERGY_TIPS, random_tip

logging.getLogger(__name__).addHandler(logging.NullHandler())  # a no-op handler that applications can replace


__all__ = [
    "APPLIANCES",
    "appliance_names",
    "default_watts",
    "REFERENCE_KWH",
    "EfficiencyBand",
    "efficiency_band",
    "Entry",
    "WattsUpError",
    "InvalidEntryInputError",
    "MalformedStateError",
    "StorageError",
    "UsageLedger",
    "UsageSession",
    "UsageSummary",
    "STORAGE_KEY",
    "KeyValueStore",
    "MemoryStore",
    "FileStore",
    "ENERGY_TIPS",
    "random_tip",
]
