"""
Text checkpoints for model snapshots.

A snapshot is written as one JSON object with a "model" tag plus every state
field, keys sorted. Python floats are written with their shortest round-trip
repr, so deserialize(serialize(s)) == s exactly. NaN and Infinity use the
JSON extensions understood by the json module, so every reachable state
(including one fed non-finite data) can be checkpointed.
"""
import json
from dataclasses import asdict, fields
from typing import Any

from kalstream.core.errors import MalformedSnapshot
from kalstream.core.ewma import EWMAState
from kalstream.core.kalman import KalmanState

MODEL_TAGS: dict[str, type] = {
    "kalman": KalmanState,
    "ewma": EWMAState,
}

# fields that must be >= 0 when present
NON_NEGATIVE = {"estimate_uncertainty", "process_noise", "measurement_noise"}


def _tag_for(state) -> str:
    for tag, cls in MODEL_TAGS.items():
        if type(state) is cls:
            return tag
    raise TypeError(f"no snapshot encoding for {type(state).__name__}")


def snapshot_to_dict(state) -> dict[str, Any]:
    record = asdict(state)
    record["model"] = _tag_for(state)
    return record


def serialize(state) -> str:
    return json.dumps(snapshot_to_dict(state), sort_keys=True, separators=(",", ":"))


def _number(record: dict, name: str) -> float:
    val = record[name]
    # bool is an int subclass, reject it explicitly
    if isinstance(val, bool) or not isinstance(val, (int, float)):
        raise MalformedSnapshot(f"field {name!r} must be a number, got {type(val).__name__}", name)
    try:
        val = float(val)
    except OverflowError as e:
        raise MalformedSnapshot(f"field {name!r} out of range", name) from e
    if name in NON_NEGATIVE and val < 0:
        raise MalformedSnapshot(f"field {name!r} must be >= 0, got {val}", name)
    return val


def _check_ewma(values: dict) -> None:
    alpha = values["alpha"]
    # a huge half-life rounds alpha down to exactly 0
    if not 0.0 <= alpha <= 1.0:
        raise MalformedSnapshot(f"field 'alpha' must be in [0, 1], got {alpha}", "alpha")


def snapshot_from_dict(record: Any):
    if not isinstance(record, dict):
        raise MalformedSnapshot(f"snapshot must be an object, got {type(record).__name__}")
    if "model" not in record:
        raise MalformedSnapshot("missing field 'model'", "model")
    tag = record["model"]
    cls = MODEL_TAGS.get(tag) if isinstance(tag, str) else None
    if cls is None:
        raise MalformedSnapshot(f"unknown model tag {tag!r}", "model")

    names = [f.name for f in fields(cls)]
    for name in names:
        if name not in record:
            raise MalformedSnapshot(f"missing field {name!r}", name)
    extra = set(record) - set(names) - {"model"}
    if extra:
        raise MalformedSnapshot(f"unexpected fields {sorted(extra)}", sorted(extra)[0])

    values = {}
    for name in names:
        if name == "warmed_up":
            if not isinstance(record[name], bool):
                raise MalformedSnapshot("field 'warmed_up' must be a boolean", name)
            values[name] = record[name]
        else:
            values[name] = _number(record, name)
    if cls is EWMAState:
        _check_ewma(values)
    return cls(**values)


def deserialize(text: str | bytes):
    """Inverse of serialize. Raises MalformedSnapshot, never returns a partial state."""
    # ValueError covers JSONDecodeError, UnicodeDecodeError and the int digit limit
    try:
        record = json.loads(text)
    except (ValueError, TypeError, RecursionError) as e:
        raise MalformedSnapshot(f"snapshot is not valid JSON: {e}") from e
    return snapshot_from_dict(record)
