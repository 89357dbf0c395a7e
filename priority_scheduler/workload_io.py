from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, List, Mapping, Tuple

from .errors import InvalidInputError
from .models import Process

logger = logging.getLogger(__name__)

# Starting rows of the interactive form.
DEFAULT_WORKLOAD: Tuple[Process, ...] = (
    Process("P1", arrival_time=0, burst_time=5, priority=3),
    Process("P2", arrival_time=1, burst_time=7, priority=1),
    Process("P3", arrival_time=2, burst_time=4, priority=2),
)

_FIELD_ALIASES = {
    "pid": ("pid", "id"),
    "arrival_time": ("arrival_time", "arrivalTime"),
    "burst_time": ("burst_time", "burstTime"),
    "priority": ("priority",),
}


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        processes = _load_json(path)
    elif suffix == ".csv":
        processes = _load_csv(path)
    else:
        raise InvalidInputError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    logger.debug("Loaded %d processes from %s", len(processes), path)
    return processes


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise InvalidInputError(f"Malformed JSON workload {path}: {exc}") from exc

    if not isinstance(raw, list):
        raise InvalidInputError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    processes: List[Process] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            processes.append(_process_from_mapping(row))
    return processes


def _lookup(mapping: Mapping[str, Any], field: str) -> Any:
    for key in _FIELD_ALIASES[field]:
        value = mapping.get(key)
        if value not in (None, ""):
            return value
    raise KeyError(field)


def _to_int(value: Any) -> int:
    """
    Accept ints, whole-number floats and integer strings; anything else
    raises ValueError instead of being truncated.
    """
    if isinstance(value, bool):
        raise ValueError(f"boolean is not an integer: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"not a whole number: {value!r}")
        return int(value)
    if isinstance(value, str):
        return int(value.strip())
    raise TypeError(f"expected an integer, got {value!r}")


def _process_from_mapping(mapping: Any) -> Process:
    if not isinstance(mapping, Mapping):
        raise InvalidInputError(f"Invalid process entry: {mapping!r}")

    try:
        pid = str(_lookup(mapping, "pid")).strip()
        arrival_time = _to_int(_lookup(mapping, "arrival_time"))
        burst_time = _to_int(_lookup(mapping, "burst_time"))
        priority = _to_int(_lookup(mapping, "priority"))
    except KeyError as exc:
        raise InvalidInputError(f"Process entry is missing '{exc.args[0]}': {dict(mapping)!r}") from exc
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"Invalid process entry: {dict(mapping)!r}") from exc

    return Process(
        pid=pid,
        arrival_time=arrival_time,
        burst_time=burst_time,
        priority=priority,
    )
