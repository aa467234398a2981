from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

# payload key -> field; first match wins
_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "activity_type": ("activityType", "activity_type", "type"),
    "duration": ("duration",),
    "distance": ("distance",),
    "name": ("name",),
}


@dataclass
class Activity:
    """An activity as returned by a plain JSON endpoint. Values are not validated."""

    activity_type: Optional[str] = None
    duration: int = 0
    distance: float = 0.0
    name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Activity":
        """Build an Activity from a JSON object, ignoring keys it does not know."""
        values: dict[str, Any] = {}
        for field_name, aliases in _FIELD_ALIASES.items():
            for alias in aliases:
                if data.get(alias) is not None:
                    values[field_name] = data[alias]
                    break
        if "duration" in values:
            values["duration"] = int(values["duration"])
        if "distance" in values:
            values["distance"] = float(values["distance"])
        return cls(**values)
