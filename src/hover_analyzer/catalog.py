"""
Motor Catalog Module
====================

Reads motor spec sheets (thrust-test tables per propeller and battery
voltage) and the catalog index that lists them, from local JSON files.

File Formats:
------------
Catalog index - either a list or an object with a "catalog" list:

    {"catalog": [
        {"id": "x8", "name": "T-Motor X8", "url": "motors/x8.json"}
    ]}

Relative "url" values are resolved against the index file's directory.

Motor spec sheet:

    {
        "id": "x8",
        "name": "T-Motor X8",
        "props": [
            {"id": "2880", "name": "28x8.0",
             "data": {"12S": [{"current": 4.1, "thrust_kg": 2.0, "throttle": 40}, ...],
                      "6S": [...]}}
        ]
    }

Usage:
------
    from src.hover_analyzer.catalog import load_motor_spec

    spec = load_motor_spec(Path("motors/x8.json"))
    props = spec.props_for_voltage("12S")
    rows = spec.samples(props[0].id, "12S")
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd


SAMPLE_COLUMNS = ["motor", "prop", "voltage", "current", "thrust", "throttle"]


@dataclass(frozen=True)
class CatalogEntry:
    """One motor listed in a catalog index."""
    id: str
    name: str
    url: str

    @property
    def path(self) -> Path:
        return Path(self.url)


@dataclass
class PropSpec:
    """
    Thrust-test data for one propeller on a motor.

    Attributes:
    ----------
    id : str
        Propeller identifier

    name : str
        Display name

    data : dict
        Voltage label (e.g. "12S") -> list of raw sample rows
    """
    id: str
    name: str
    data: Dict[str, List[Dict[str, Any]]] = field(default_factory=dict)

    def has_data(self, voltage: str) -> bool:
        return bool(self.data.get(voltage))


@dataclass
class MotorSpec:
    """A motor spec sheet with its tested propellers."""
    id: str
    name: str
    props: List[PropSpec] = field(default_factory=list)

    def get_prop(self, prop_id: str) -> Optional[PropSpec]:
        for prop in self.props:
            if prop.id == prop_id:
                return prop
        return None

    def props_for_voltage(self, voltage: str) -> List[PropSpec]:
        """Get the propellers that have at least one sample at a voltage."""
        return [p for p in self.props if p.has_data(voltage)]

    def samples(self, prop_id: str, voltage: str) -> List[Dict[str, Any]]:
        """Get the raw sample rows of a prop at a voltage (empty if missing)."""
        prop = self.get_prop(prop_id)
        if prop is None:
            return []
        return list(prop.data.get(voltage) or [])

    @property
    def voltages(self) -> List[str]:
        found = []
        for prop in self.props:
            for voltage in prop.data:
                if voltage not in found:
                    found.append(voltage)
        return found


def _read_json(filepath: Path) -> Any:
    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")

    with open(filepath, "r", encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {filepath}: {e}") from e


def load_catalog(filepath: Union[str, Path]) -> List[CatalogEntry]:
    """
    Load a catalog index file.

    Raises:
    ------
    FileNotFoundError
        If the index does not exist.

    ValueError
        If the index is not a list or an object with a "catalog" list.
    """
    filepath = Path(filepath)
    data = _read_json(filepath)

    entries = data if isinstance(data, list) else (
        data.get("catalog", []) if isinstance(data, dict) else None
    )
    if not isinstance(entries, list):
        raise ValueError(f"Catalog index must be a list or contain a 'catalog' list: {filepath}")

    catalog = []
    for entry in entries:
        if not isinstance(entry, dict) or "id" not in entry:
            raise ValueError(f"Catalog entry without an id in {filepath}: {entry!r}")
        url = entry.get("url", "")
        if url and "://" not in url and not Path(url).is_absolute():
            url = str(filepath.parent / url)
        catalog.append(CatalogEntry(
            id=str(entry["id"]),
            name=str(entry.get("name", entry["id"])),
            url=url,
        ))
    return catalog


def find_entry(catalog: List[CatalogEntry], motor_id: str) -> Optional[CatalogEntry]:
    for entry in catalog:
        if entry.id == motor_id:
            return entry
    return None


def parse_motor_spec(data: Dict[str, Any]) -> MotorSpec:
    """
    Build a MotorSpec from a decoded spec-sheet document.

    Raises:
    ------
    ValueError
        If the document or one of its props is malformed.
    """
    if not isinstance(data, dict):
        raise ValueError("Motor spec must be a JSON object")

    props = []
    for raw in data.get("props") or []:
        if not isinstance(raw, dict) or "id" not in raw:
            raise ValueError(f"Prop entry without an id: {raw!r}")
        prop_data = raw.get("data") or {}
        if not isinstance(prop_data, dict):
            raise ValueError(f"Prop '{raw['id']}' data must map voltages to rows")
        props.append(PropSpec(
            id=str(raw["id"]),
            name=str(raw.get("name", raw["id"])),
            data={str(v): list(rows or []) for v, rows in prop_data.items()},
        ))

    motor_id = str(data.get("id", ""))
    return MotorSpec(id=motor_id, name=str(data.get("name", motor_id)), props=props)


def load_motor_spec(filepath: Union[str, Path]) -> MotorSpec:
    """
    Load a motor spec sheet from a JSON file.

    Raises:
    ------
    FileNotFoundError
        If the file does not exist.

    ValueError
        If the file is not a valid spec sheet.
    """
    return parse_motor_spec(_read_json(Path(filepath)))


def samples_dataframe(spec: MotorSpec) -> pd.DataFrame:
    """
    Flatten every prop/voltage table of a motor into one DataFrame.

    Columns: motor, prop, voltage, current, thrust, throttle. Thrust is
    read from "thrust", or from "thrust_kg" when that is absent or null.
    Missing values become NaN.
    """
    records = []
    for prop in spec.props:
        for voltage, rows in prop.data.items():
            for row in rows:
                thrust = row.get("thrust")
                if thrust is None:
                    thrust = row.get("thrust_kg")
                records.append({
                    "motor": spec.id,
                    "prop": prop.id,
                    "voltage": voltage,
                    "current": row.get("current"),
                    "thrust": thrust,
                    "throttle": row.get("throttle"),
                })

    df = pd.DataFrame.from_records(records, columns=SAMPLE_COLUMNS)
    for column in ("current", "thrust", "throttle"):
        df[column] = pd.to_numeric(df[column], errors="coerce")
    return df
