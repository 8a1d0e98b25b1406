"""
Star Catalog

Named fixed objects with their equatorial coordinates. Coordinates are kept
in the text form used by the catalog data ("2h 4m", "42.3°") and parsed into
EquatorialCoordinate on load.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional

import yaml

from .coordinates import EquatorialCoordinate
from .errors import CatalogError, ObjectNotFoundError

RA_HM_RE = re.compile(r"^\s*(\d+)\s*h(?:\s*(\d+(?:\.\d+)?)\s*m)?\s*$", re.IGNORECASE)
RA_COLON_RE = re.compile(r"^\s*(\d+):(\d+(?:\.\d+)?)\s*$")
DEC_RE = re.compile(r"^\s*([+-]?\d+(?:\.\d+)?)\s*(?:°|deg)?\s*$")


def parse_right_ascension(text: str) -> tuple:
    """
    Parses right ascension text into (hour, minute).

    Accepts "2h 4m", "2h 4.5m", "2h" and "02:04".
    """
    match = RA_HM_RE.match(text) or RA_COLON_RE.match(text)
    if not match:
        raise ValueError(f"Unrecognized right ascension: {text!r}")
    hour = int(match.group(1))
    minute = float(match.group(2) or 0.0)
    return hour, minute


def parse_declination(text) -> float:
    """Parses declination text like "42.3°" or "-16.7" into degrees."""
    if isinstance(text, (int, float)):
        return float(text)
    match = DEC_RE.match(text)
    if not match:
        raise ValueError(f"Unrecognized declination: {text!r}")
    return float(match.group(1))


@dataclass(frozen=True)
class CatalogEntry:
    constellation: str
    name: str
    coordinate: EquatorialCoordinate

    @classmethod
    def from_record(cls, record: dict) -> "CatalogEntry":
        """Builds an entry from a raw catalog record."""
        try:
            name = record.get("name", record.get("Star"))
            constellation = record.get("constellation", record.get("Constellation", ""))
            hour, minute = parse_right_ascension(str(record["rightAscension"]))
            dec = parse_declination(record["declination"])
            coordinate = EquatorialCoordinate(hour, minute, dec)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise CatalogError(f"Invalid catalog record: {e}", {"record": record})
        if not name:
            raise CatalogError("Catalog record has no name", {"record": record})
        return cls(constellation, name, coordinate)


BUILTIN_RECORDS = [
    {"constellation": "Andromeda", "name": "Almaak", "rightAscension": "2h 4m", "declination": "42.3°"},
    {"constellation": "Andromeda", "name": "Alpheratz", "rightAscension": "0h 8m", "declination": "29.1°"},
    {"constellation": "Aquila", "name": "Altair", "rightAscension": "19h 51m", "declination": "8.9°"},
    {"constellation": "Auriga", "name": "Capella", "rightAscension": "5h 17m", "declination": "46.0°"},
    {"constellation": "Bootes", "name": "Arcturus", "rightAscension": "14h 16m", "declination": "19.2°"},
    {"constellation": "Canis Major", "name": "Sirius", "rightAscension": "6h 45m", "declination": "-16.7°"},
    {"constellation": "Cygnus", "name": "Deneb", "rightAscension": "20h 41m", "declination": "45.3°"},
    {"constellation": "Lyra", "name": "Vega", "rightAscension": "18h 37m", "declination": "38.8°"},
    {"constellation": "Orion", "name": "Betelgeuse", "rightAscension": "5h 55m", "declination": "7.4°"},
    {"constellation": "Orion", "name": "Rigel", "rightAscension": "5h 15m", "declination": "-8.2°"},
    {"constellation": "Scorpius", "name": "Antares", "rightAscension": "16h 29m", "declination": "-26.4°"},
    {"constellation": "Ursa Minor", "name": "Polaris", "rightAscension": "2h 32m", "declination": "89.3°"},
]


class Catalog:
    """Ordered, read-only collection of catalog entries."""

    def __init__(self, entries: Iterable[CatalogEntry]):
        self.entries: List[CatalogEntry] = list(entries)

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def find(self, name: str) -> CatalogEntry:
        """Looks an entry up by name, ignoring case and surrounding spaces."""
        key = name.strip().lower()
        for entry in self.entries:
            if entry.name.lower() == key:
                return entry
        raise ObjectNotFoundError(name)

    @classmethod
    def from_records(cls, records: Iterable[dict]) -> "Catalog":
        return cls(CatalogEntry.from_record(r) for r in records)


def builtin_catalog() -> Catalog:
    return Catalog.from_records(BUILTIN_RECORDS)


def load_catalog(path: Optional[str] = None) -> Catalog:
    """
    Loads a catalog from a YAML list of records, or the built-in one.

    Each record needs constellation, name, rightAscension and declination
    ("Constellation"/"Star" keys are accepted too).
    """
    if not path:
        return builtin_catalog()
    try:
        with open(path, "r", encoding="utf-8") as f:
            records = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise CatalogError(f"Cannot read catalog: {e}", {"path": path})
    if not isinstance(records, list):
        raise CatalogError("Catalog file must contain a list of records", {"path": path})
    return Catalog.from_records(records)
