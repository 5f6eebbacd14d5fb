"""
Run history decoding.

The service returns a run's history as a list of per-step snapshots. Each
snapshot is either a JSON-encoded string or an already decoded object, and
maps metric keys to values of any JSON type. This module turns such a list
into one numeric series per metric key.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from wbglance.models import MetricPoint, MetricSeries

logger = logging.getLogger(__name__)

# Bookkeeping keys written by the tracking library, not user metrics
RESERVED_KEYS = frozenset(["_step", "_runtime", "_timestamp"])


@dataclass(frozen=True)
class EncodedSnapshot:
    """A snapshot delivered as JSON text."""

    text: str


@dataclass(frozen=True)
class DecodedSnapshot:
    """A snapshot delivered as an already decoded object."""

    fields: dict[str, Any]


SnapshotSource = EncodedSnapshot | DecodedSnapshot


def classify_entry(entry: Any) -> SnapshotSource | None:
    """Classify a raw history entry by its representation.

    Args:
        entry: One element of the ``history`` array

    Returns:
        The snapshot source, or None if the entry is neither a string nor an object.
    """
    if isinstance(entry, str):
        return EncodedSnapshot(entry)
    if isinstance(entry, dict):
        return DecodedSnapshot(entry)
    return None


def normalize_snapshot(source: SnapshotSource) -> dict[str, Any] | None:
    """Turn a snapshot source into a plain mapping.

    Args:
        source: Classified snapshot

    Returns:
        The snapshot's fields, or None if encoded text does not hold a JSON object.
    """
    if isinstance(source, DecodedSnapshot):
        return source.fields

    try:
        parsed = json.loads(source.text)
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


def numeric_value(value: Any) -> float | None:
    """Return a JSON value as a float if it is a number.

    Booleans, strings, null, arrays and objects are not numbers.

    Args:
        value: Decoded JSON value

    Returns:
        The value as float, or None for non-numeric values.
    """
    # bool is a subclass of int
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            return None
    return None


def decode_history(history: list[Any]) -> list[MetricSeries]:
    """Reconstruct metric series from a run history.

    Each decoded snapshot's zero-based position becomes the step of every
    metric value it contains, whatever step the snapshot itself records.
    Entries that cannot be decoded are skipped and do not occupy a position.

    Args:
        history: Raw ``history`` array from the service

    Returns:
        One series per key that had at least one numeric value. The order of
        series is not meaningful; points inside a series are ordered by step.
    """
    accumulated: dict[str, list[MetricPoint]] = {}
    skipped = 0
    step = 0

    for index, entry in enumerate(history):
        source = classify_entry(entry)
        snapshot = normalize_snapshot(source) if source is not None else None
        if snapshot is None:
            skipped += 1
            logger.debug(f"Skipping undecodable history entry {index}: {type(entry).__name__}")
            continue

        for key, raw in snapshot.items():
            if key in RESERVED_KEYS:
                continue
            value = numeric_value(raw)
            if value is None:
                continue
            accumulated.setdefault(key, []).append(MetricPoint(step=step, value=value))
        step += 1

    if skipped:
        logger.debug(f"Skipped {skipped} of {len(history)} history entries")

    return [MetricSeries(name=name, points=tuple(points)) for name, points in accumulated.items()]
