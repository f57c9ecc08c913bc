"""
Directed edge record and weight validation for aodvsim.

Undirected links are stored as two Edge records (a -> b and b -> a) that the
topology graph keeps at the same weight.
"""

from dataclasses import dataclass
from typing import Union
import math

from errors import InvalidEdge


@dataclass
class Edge:
    """
    Directed link src -> dst with a mutable weight.
    """

    src: str
    dst: str
    weight: float


def validate_weight(weight: float, allow_negative: bool = False) -> float:
    """
    Return ``weight`` as a float or raise InvalidEdge.

    Weights must be finite. Negative weights break Dijkstra's correctness, so
    they are refused unless ``allow_negative`` is set.
    """
    if isinstance(weight, bool):
        raise InvalidEdge(f"Edge weight {weight!r} is not a number.")
    try:
        value = float(weight)
    except (TypeError, ValueError) as exc:
        raise InvalidEdge(f"Edge weight {weight!r} is not a number.") from exc
    if not math.isfinite(value):
        raise InvalidEdge(f"Edge weight must be finite, got {value}.")
    if value < 0 and not allow_negative:
        raise InvalidEdge(f"Edge weight must be non-negative, got {value}.")
    return value


def parse_weight(
    raw: Union[str, float, int, None],
    default: float = 1.0,
    allow_negative: bool = False,
) -> float:
    """
    Turn user-entered weight text into a validated float.

    Blank or missing input falls back to ``default``. Text that is not a
    number raises InvalidEdge rather than being dropped.
    """
    if raw is None:
        return validate_weight(default, allow_negative)
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return validate_weight(default, allow_negative)
        try:
            value = float(text)
        except ValueError as exc:
            raise InvalidEdge(f"Bad weight {raw!r}.") from exc
        return validate_weight(value, allow_negative)
    return validate_weight(raw, allow_negative)
