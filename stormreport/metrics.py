"""
Outcome metrics that the report can rank and map.
"""

from enum import Enum

from .constants import (
    INJURIES,
    FATALITIES,
    PROPERTY_DAMAGE,
    CROP_DAMAGE,
    TOTAL_DAMAGE,
)


class Metric(Enum):
    """Closed set of outcome metrics, each bound to its clean-table column."""

    INJURIES = INJURIES
    FATALITIES = FATALITIES
    PROPERTY_DAMAGE = PROPERTY_DAMAGE
    CROP_DAMAGE = CROP_DAMAGE
    TOTAL_DAMAGE = TOTAL_DAMAGE

    @property
    def column(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return METRIC_LABELS[self]

    @property
    def unit(self) -> str:
        return "USD" if self in DAMAGE_METRICS else "count"

    @classmethod
    def parse(cls, value) -> "Metric":
        """
        Resolve a Metric from a member or its name ('total_damage', 'TOTAL_DAMAGE').

        Raises:
            ValueError: if the name is not one of the known metrics
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for metric in cls:
            if metric.value == key:
                return metric
        valid = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown metric '{value}'. Valid metrics: {valid}")


DAMAGE_METRICS = frozenset({
    Metric.PROPERTY_DAMAGE,
    Metric.CROP_DAMAGE,
    Metric.TOTAL_DAMAGE,
})

METRIC_LABELS = {
    Metric.INJURIES: "Injuries",
    Metric.FATALITIES: "Fatalities",
    Metric.PROPERTY_DAMAGE: "Property Damage",
    Metric.CROP_DAMAGE: "Crop Damage",
    Metric.TOTAL_DAMAGE: "Total Damage",
}
