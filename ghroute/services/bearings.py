from typing import List, Optional


def parse_bearings(bearings: Optional[str]) -> List[Optional[float]]:
    """Parse a ``;`` separated bearings parameter into one slot per waypoint.

    Each non-empty slot is ``angle[,tolerance]``; only the angle is kept.
    Empty or unparsable slots become ``None``. An empty string has no slots.
    """
    if not bearings:
        return []

    result: List[Optional[float]] = []
    for slot in bearings.split(";"):
        angle = slot.split(",")[0].strip()
        try:
            result.append(float(angle) if angle else None)
        except ValueError:
            result.append(None)
    return result
