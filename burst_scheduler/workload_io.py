from __future__ import annotations

import csv
import json
import re
from pathlib import Path
from typing import Iterable, List

BURST_KEYS = ("burst_time", "burst")


def load_bursts(path: str | Path) -> List[int]:
    """
    Load burst lengths from a JSON, CSV or plain-text file, in file order.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)
    if suffix == ".txt":
        return _load_txt(path)

    raise ValueError(f"Unsupported workload format: {suffix} (use .json, .csv or .txt)")


def parse_bursts(values: Iterable[str]) -> List[int]:
    """
    Convert command-line strings to burst lengths.
    """
    return [_to_burst(v) for v in values]


def _load_json(path: Path) -> List[int]:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise ValueError("JSON workload must be a list of burst lengths or process objects")

    bursts: List[int] = []
    for entry in raw:
        if isinstance(entry, dict):
            bursts.append(_burst_from_mapping(entry))
        else:
            bursts.append(_to_burst(entry))
    return bursts


def _load_csv(path: Path) -> List[int]:
    bursts: List[int] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            bursts.append(_burst_from_mapping(row))
    return bursts


def _load_txt(path: Path) -> List[int]:
    bursts: List[int] = []
    with path.open("r", encoding="utf-8") as f:
        for line in f:
            line = line.split("#", 1)[0]
            bursts.extend(_to_burst(tok) for tok in re.split(r"[\s,]+", line) if tok)
    return bursts


def _burst_from_mapping(mapping) -> int:
    for key in BURST_KEYS:
        if key in mapping:
            return _to_burst(mapping[key])
    raise ValueError(f"Invalid process entry (no burst_time): {mapping!r}")


def _to_burst(value) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Invalid burst length: {value!r}")
    try:
        burst = int(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise ValueError(f"Invalid burst length: {value!r}") from exc

    if isinstance(value, float) and value != burst:
        raise ValueError(f"Invalid burst length: {value!r}")
    if burst < 0:
        raise ValueError(f"Burst length must be >= 0, got {burst}")
    return burst
