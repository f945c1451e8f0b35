import unittest

import orjson

from watts_up.efficiency import EfficiencyBand
from watts_up.entry import Entry
from watts_up.exceptions import InvalidEntryInputError, MalformedStateError
from watts_up.ledger import UsageLedger
from watts_up.storage import MemoryStore, STORAGE_KEY


class LedgerTests(unittest.TestCase):

    def testAppend(self):
        ledger = UsageLedger()
        entry = ledger.append("Refrigerator", 150, 24)
        self.assertAlmostEqual(3.6, entry.kwh)
        self.assertEqual("Refrigerator", entry.name)
        self.assertEqual(150, entry.watts)
        self.assertEqual(24, entry.hours)

        for watts, hours in [(9, 5.5), (1800, 0.25), (3000, 1), (0, 12), (75, 0)]:
            entry = ledger.append("Other", watts, hours)
            self.assertAlmostEqual(watts * hours / 1000, entry.kwh)

        self.assertEqual(6, len(ledger))
        self.assertEqual(6, len({entry.id for entry in ledger}))  # all ids are unique

    def testAppendStrings(self):
        ledger = UsageLedger()
        entry = ledger.append("TV", "100", " 2.5 ")
        self.assertEqual(100.0, entry.watts)
        self.assertEqual(2.5, entry.hours)
        self.assertAlmostEqual(0.25, entry.kwh)

    def testInvalidInput(self):
        ledger = UsageLedger()

        for watts in ["", "abc", None, -5, float("nan"), float("inf"), True, [150]]:
            with self.assertRaises(InvalidEntryInputError):
                ledger.append("TV", watts, 2)

        for hours in ["", "soon", None, -1, float("nan")]:
            with self.assertRaises(InvalidEntryInputError) as context:
                ledger.append("TV", 100, hours)
            self.assertEqual("hours", context.exception.field)

        self.assertTrue(ledger.is_empty)

    def testHoursFallback(self):
        ledger = UsageLedger(hours_fallback=24)
        entry = ledger.append("Refrigerator", 150, "")
        self.assertEqual(24, entry.hours)
        self.assertAlmostEqual(3.6, entry.kwh)

        with self.assertRaises(InvalidEntryInputError):
            ledger.append("Refrigerator", "lots", 2)  # the fallback only applies to the hours

    def testEnergyOverflow(self):
        ledger = UsageLedger()
        with self.assertRaises(InvalidEntryInputError) as context:
            ledger.append("Other", 1e308, 24)  # both values are finite, their product is not
        self.assertEqual("watts", context.exception.field)

        with self.assertRaises(InvalidEntryInputError):
            ledger.append("Other", 1e200, "1e200")
        self.assertTrue(ledger.is_empty)

        # large but representable values survive a save and load
        store = MemoryStore()
        entry = ledger.append("Other", 1e300, 24)
        ledger.save(store)
        restored = UsageLedger.load(store)
        self.assertEqual((entry,), restored.entries)
        self.assertEqual(ledger.total_kwh(), restored.total_kwh())

    def testInvalidFallback(self):
        for fallback in [-1, "soon", float("nan"), float("inf")]:
            with self.assertRaises(ValueError):
                UsageLedger(hours_fallback=fallback)

        ledger = UsageLedger(hours_fallback="12")
        self.assertEqual(12.0, ledger.append("TV", 100, None).hours)

    def testEntriesAreImmutable(self):
        entry = UsageLedger().append("Laptop", 50, 8)
        with self.assertRaises(AttributeError):
            entry.watts = 500  # noqa
        self.assertAlmostEqual(0.4, entry.kwh)

    def testTotal(self):
        ledger = UsageLedger()
        self.assertEqual(0, ledger.total_kwh())
        self.assertEqual(0, ledger.comparison_percentage())

        values = [(150, 24), (1500, 2), (9, 5), (60, 3)]
        for watts, hours in values:
            ledger.append("Other", watts, hours)
        self.assertAlmostEqual(sum(entry.kwh for entry in ledger), ledger.total_kwh())

        reverse = UsageLedger()
        for watts, hours in reversed(values):
            reverse.append("Other", watts, hours)
        self.assertAlmostEqual(ledger.total_kwh(), reverse.total_kwh())

    def testRemove(self):
        ledger = UsageLedger()
        fridge = ledger.append("Refrigerator", 150, 24)
        heater = ledger.append("AC/Heater", 1500, 2)
        laptop = ledger.append("Laptop", 50, 4)

        ledger.remove(heater.id)
        self.assertEqual([fridge, laptop], list(ledger))
        self.assertAlmostEqual(3.8, ledger.total_kwh())

        ledger.remove(heater.id)  # removing it again has no effect
        ledger.remove(-1)
        self.assertEqual((fridge, laptop), ledger.entries)
        self.assertAlmostEqual(3.8, ledger.total_kwh())

    def testComparison(self):
        ledger = UsageLedger()
        ledger.append("Dryer", 3000, 1)
        self.assertAlmostEqual(10.0, ledger.comparison_percentage())

        ledger.append("Dryer", 3000, 1)  # doubling the usage doubles the percentage
        self.assertAlmostEqual(20.0, ledger.comparison_percentage())

        custom = UsageLedger(reference_kwh=12)
        custom.append("Dryer", 3000, 1)
        self.assertAlmostEqual(25.0, custom.comparison_percentage())

        with self.assertRaises(ValueError):
            UsageLedger(reference_kwh=0)

    def testExample(self):
        ledger = UsageLedger()
        self.assertAlmostEqual(3.6, ledger.append("Refrigerator", 150, 24).kwh)
        self.assertAlmostEqual(3.0, ledger.append("AC/Heater", 1500, 2).kwh)
        self.assertAlmostEqual(6.6, ledger.total_kwh())
        self.assertAlmostEqual(22.0, ledger.comparison_percentage())
        self.assertEqual(EfficiencyBand.EXCELLENT, ledger.efficiency_band())
        self.assertEqual(EfficiencyBand.ABOVE_AVERAGE, ledger.efficiency_band(150))

    def testRoundTrip(self):
        empty = UsageLedger()
        restored = UsageLedger.deserialize(empty.serialize())
        self.assertEqual((), restored.entries)
        self.assertEqual(0, restored.total_kwh())

        ledger = UsageLedger()
        ledger.append("Refrigerator", 150, 24)
        ledger.append("Light Bulb (LED)", 9, 5.5)
        ledger.append("Hair Dryer", "1800", "0.2")

        restored = UsageLedger.deserialize(ledger.serialize())
        self.assertEqual(ledger.entries, restored.entries)
        self.assertEqual(ledger.total_kwh(), restored.total_kwh())

        restored = UsageLedger.deserialize(ledger.serialize().encode("utf-8"))
        self.assertEqual(ledger.entries, restored.entries)

    def testStoredLayout(self):
        # data written by the browser application uses integer watts and the "kWh" key
        data = orjson.dumps([
            {"id": 1653571435000, "name": "Refrigerator", "watts": 150, "hours": 24, "kWh": 3.6},
            {"id": 1653571437000, "name": "TV", "watts": 100, "hours": 2.5, "kWh": 0.25},
        ])
        ledger = UsageLedger.deserialize(data)
        self.assertEqual(Entry(1653571435000, "Refrigerator", 150.0, 24.0, 3.6), ledger.entries[0])
        self.assertAlmostEqual(3.85, ledger.total_kwh())

        # new ids continue after the restored ones
        entry = ledger.append("Laptop", 50, 1)
        self.assertGreater(entry.id, 1653571437000)

        stored = orjson.loads(ledger.serialize())
        self.assertEqual({"id", "name", "watts", "hours", "kWh"}, set(stored[0].keys()))

    def testMalformed(self):
        broken = [
            "",
            "[{",
            "{}",
            "42",
            "[1, 2]",
            '[{"id": 1, "name": "TV", "watts": 100, "hours": 2}]',  # missing kWh
            '[{"id": "one", "name": "TV", "watts": 100, "hours": 2, "kWh": 0.2}]',  # the id is not a number
            '[{"id": 1, "name": "TV", "watts": "lots", "hours": 2, "kWh": 0.2}]',  # the watts are not a number
            '[{"id": 1, "name": "TV", "watts": "150", "hours": 2, "kWh": 0.3}]',  # numbers are never stored as strings
            '[{"id": 1, "name": "TV", "watts": 150, "hours": "2", "kWh": "0.3"}]',
            '[{"id": true, "name": "TV", "watts": 150, "hours": 2, "kWh": 0.3}]',  # a boolean is not an id
            '[{"id": 1, "name": "TV", "watts": false, "hours": 2, "kWh": 0.3}]',
            '[{"id": 1, "name": "TV", "watts": 150, "hours": 2, "kWh": null}]',
        ]
        for data in broken:
            with self.assertRaises(MalformedStateError):
                UsageLedger.deserialize(data)

        with self.assertRaises(MalformedStateError):
            UsageLedger.deserialize(None)  # noqa

    def testSaveAndLoad(self):
        store = MemoryStore()
        self.assertTrue(UsageLedger.load(store).is_empty)

        ledger = UsageLedger()
        ledger.append("Refrigerator", 150, 24)
        ledger.append("Microwave", 1000, 0.5)
        ledger.save(store)
        self.assertEqual(ledger.serialize(), store.get(STORAGE_KEY))

        restored = UsageLedger.load(store, reference_kwh=20)
        self.assertEqual(ledger.entries, restored.entries)
        self.assertEqual(20, restored.reference_kwh)

        ledger.save(store, key="other")
        self.assertEqual(2, len(UsageLedger.load(store, key="other")))

    def testLoadMalformed(self):
        store = MemoryStore({STORAGE_KEY: "[{not json"})
        with self.assertLogs("watts_up.ledger", level="INFO"):
            ledger = UsageLedger.load(store)
        self.assertTrue(ledger.is_empty)
        self.assertEqual(0, ledger.total_kwh())


if __name__ == '__main__':
    unittest.main()
