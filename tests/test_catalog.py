"""
Motor Catalog Tests
===================

Verifies reading of catalog indexes and motor spec sheets from disk:
- Relative spec-sheet paths resolved against the index
- Props filtered by available voltage
- Sample rows flattened into a DataFrame usable by the series builder
"""

import json
import math
import sys
import tempfile
from pathlib import Path
import unittest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.hover_analyzer import build_series, load_catalog, load_motor_spec, samples_dataframe
from src.hover_analyzer.catalog import SAMPLE_COLUMNS, find_entry, parse_motor_spec


SPEC_SHEET = {
    "id": "x8",
    "name": "T-Motor X8",
    "props": [
        {
            "id": "2880",
            "name": "28x8.0",
            "data": {
                "12S": [
                    {"current": 4.1, "thrust_kg": 2.0, "throttle": 40},
                    {"current": 9.8, "thrust_kg": 4.0, "throttle": 55},
                    {"current": 18.5, "thrust_kg": 6.5, "throttle": 70},
                ],
                "6S": [],
            },
        },
        {
            "id": "3011",
            "name": "30x11",
            "data": {
                "6S": [{"current": 12.0, "thrust_kg": 3.1}],
            },
        },
    ],
}


class CatalogFilesMixin:
    """Writes a catalog index and spec sheet into a temporary directory."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        (self.root / "motors").mkdir()
        self.spec_path = self.root / "motors" / "x8.json"
        self.spec_path.write_text(json.dumps(SPEC_SHEET), encoding="utf-8")
        self.index_path = self.root / "index.json"
        self.index_path.write_text(json.dumps({
            "catalog": [{"id": "x8", "name": "T-Motor X8", "url": "motors/x8.json"}]
        }), encoding="utf-8")

    def tearDown(self):
        self._tmp.cleanup()


class TestLoadCatalog(CatalogFilesMixin, unittest.TestCase):
    """Test catalog index loading."""

    def test_object_with_catalog_list(self):
        catalog = load_catalog(self.index_path)
        self.assertEqual(len(catalog), 1)
        entry = catalog[0]
        self.assertEqual(entry.id, "x8")
        self.assertEqual(entry.name, "T-Motor X8")
        self.assertEqual(entry.path, self.spec_path)

    def test_plain_list(self):
        path = self.root / "list.json"
        path.write_text(json.dumps([
            {"id": "a", "url": "https://example.com/a.json"}
        ]), encoding="utf-8")
        catalog = load_catalog(path)
        self.assertEqual(catalog[0].name, "a")
        self.assertEqual(catalog[0].url, "https://example.com/a.json")

    def test_find_entry(self):
        catalog = load_catalog(self.index_path)
        self.assertEqual(find_entry(catalog, "x8").name, "T-Motor X8")
        self.assertIsNone(find_entry(catalog, "missing"))

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_catalog(self.root / "nope.json")

    def test_invalid_json(self):
        path = self.root / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with self.assertRaises(ValueError):
            load_catalog(path)

    def test_invalid_shape(self):
        path = self.root / "number.json"
        path.write_text("42", encoding="utf-8")
        with self.assertRaises(ValueError):
            load_catalog(path)


class TestMotorSpec(CatalogFilesMixin, unittest.TestCase):
    """Test spec sheet loading and queries."""

    def setUp(self):
        super().setUp()
        self.spec = load_motor_spec(self.spec_path)

    def test_fields(self):
        self.assertEqual(self.spec.id, "x8")
        self.assertEqual(self.spec.name, "T-Motor X8")
        self.assertEqual([p.id for p in self.spec.props], ["2880", "3011"])
        self.assertEqual(self.spec.voltages, ["12S", "6S"])

    def test_props_for_voltage(self):
        self.assertEqual([p.id for p in self.spec.props_for_voltage("12S")], ["2880"])
        self.assertEqual([p.id for p in self.spec.props_for_voltage("6S")], ["3011"])
        self.assertEqual(self.spec.props_for_voltage("24S"), [])

    def test_samples(self):
        rows = self.spec.samples("2880", "12S")
        self.assertEqual(len(rows), 3)
        self.assertEqual(self.spec.samples("2880", "24S"), [])
        self.assertEqual(self.spec.samples("missing", "12S"), [])

    def test_samples_build_series(self):
        series = build_series(self.spec.samples("2880", "12S"))
        self.assertEqual([p.y for p in series], [2.0, 4.0, 6.5])

    def test_malformed_prop(self):
        with self.assertRaises(ValueError):
            parse_motor_spec({"props": [{"name": "no id"}]})
        with self.assertRaises(ValueError):
            parse_motor_spec([])


class TestSamplesDataFrame(CatalogFilesMixin, unittest.TestCase):
    """Test flattening of spec sheets into a table."""

    def test_columns_and_rows(self):
        df = samples_dataframe(load_motor_spec(self.spec_path))
        self.assertEqual(list(df.columns), SAMPLE_COLUMNS)
        self.assertEqual(len(df), 4)
        row = df[df["prop"] == "3011"].iloc[0]
        self.assertEqual(row["voltage"], "6S")
        self.assertTrue(math.isnan(row["throttle"]))

    def test_series_from_dataframe(self):
        df = samples_dataframe(load_motor_spec(self.spec_path))
        subset = df[(df["prop"] == "2880") & (df["voltage"] == "12S")]
        series = build_series(subset)
        self.assertEqual([p.x for p in series], [4.1, 9.8, 18.5])

    def test_null_thrust_falls_back_to_thrust_kg(self):
        spec = parse_motor_spec({
            "id": "m",
            "props": [{
                "id": "p",
                "data": {"6S": [{"current": 4.1, "thrust": None, "thrust_kg": 1.2}]},
            }],
        })
        df = samples_dataframe(spec)
        self.assertEqual(df.iloc[0]["thrust"], 1.2)

    def test_empty_spec(self):
        df = samples_dataframe(parse_motor_spec({"id": "empty"}))
        self.assertEqual(len(df), 0)
        self.assertEqual(list(df.columns), SAMPLE_COLUMNS)


if __name__ == "__main__":
    unittest.main()
