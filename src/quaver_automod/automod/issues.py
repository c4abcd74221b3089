"""Issue records produced by AutoMod.

Every variant is a small frozen dataclass that refers back to the offending
entities of the map; nothing is copied. ``AutoModIssue`` is the union of all
variants and ``issue_type`` is the tag to dispatch on.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, ClassVar, Union

from quaver_automod.data.qua import HitObjectInfo, SliderVelocityInfo, TimingPointInfo


class AutoModIssueType(enum.Enum):
    SHORT_LONG_NOTE = "ShortLongNote"
    OBJECT_BEFORE_START = "ObjectBeforeStart"
    OVERLAPPING_OBJECTS = "OverlappingObjects"
    OBJECT_MISSING_IN_COLUMNS = "ObjectMissingInColumns"
    TIMING_POINT_OVERLAP = "TimingPointOverlap"
    SCROLL_VELOCITY_OVERLAP = "ScrollVelocityOverlap"


class AutoModIssueLevel(enum.Enum):
    """How serious an issue is. Fixed per issue type."""

    WARNING = "Warning"
    CRITICAL = "Critical"


def _ms(value: float) -> str:
    return f"{value:.0f}" if float(value).is_integer() else str(value)


def _lane_time(obj: HitObjectInfo) -> str:
    if obj.is_long_note:
        return f"{obj.start_time}-{obj.end_time}|{obj.lane}"
    return f"{obj.start_time}|{obj.lane}"


@dataclass(frozen=True, slots=True)
class ShortLongNote:
    """A long note whose hold is too short to be played as one."""

    issue_type: ClassVar[AutoModIssueType] = AutoModIssueType.SHORT_LONG_NOTE
    level: ClassVar[AutoModIssueLevel] = AutoModIssueLevel.WARNING

    hit_object: HitObjectInfo

    @property
    def text(self) -> str:
        return f"The long note at {_lane_time(self.hit_object)} is too short."


@dataclass(frozen=True, slots=True)
class ObjectBeforeStart:
    """A note (or long note end) placed before the audio begins."""

    issue_type: ClassVar[AutoModIssueType] = AutoModIssueType.OBJECT_BEFORE_START
    level: ClassVar[AutoModIssueLevel] = AutoModIssueLevel.CRITICAL

    hit_object: HitObjectInfo

    @property
    def text(self) -> str:
        return f"The object at {_lane_time(self.hit_object)} is placed before the audio begins."


@dataclass(frozen=True, slots=True)
class OverlappingObjects:
    """Two notes in the same lane that collide. ``hit_objects`` is (current, previous)."""

    issue_type: ClassVar[AutoModIssueType] = AutoModIssueType.OVERLAPPING_OBJECTS
    level: ClassVar[AutoModIssueLevel] = AutoModIssueLevel.CRITICAL

    hit_objects: tuple[HitObjectInfo, HitObjectInfo]

    @property
    def text(self) -> str:
        current, previous = self.hit_objects
        return (
            f"The objects at {_lane_time(current)} and {_lane_time(previous)} "
            "are overlapping."
        )


@dataclass(frozen=True, slots=True)
class ObjectMissingInColumns:
    """Lanes (1-indexed) that never receive a note. May be empty."""

    issue_type: ClassVar[AutoModIssueType] = AutoModIssueType.OBJECT_MISSING_IN_COLUMNS
    level: ClassVar[AutoModIssueLevel] = AutoModIssueLevel.CRITICAL

    columns: tuple[int, ...]

    @property
    def text(self) -> str:
        if not self.columns:
            return "Every column has at least one object."
        joined = ", ".join(str(c) for c in self.columns)
        return f"There must be at least one object in column(s): {joined}."


@dataclass(frozen=True, slots=True)
class TimingPointOverlap:
    """Two consecutive timing points at the same time. (current, previous)."""

    issue_type: ClassVar[AutoModIssueType] = AutoModIssueType.TIMING_POINT_OVERLAP
    level: ClassVar[AutoModIssueLevel] = AutoModIssueLevel.WARNING

    timing_points: tuple[TimingPointInfo, TimingPointInfo]

    @property
    def text(self) -> str:
        return f"There are multiple timing points at {_ms(self.timing_points[0].start_time)}."


@dataclass(frozen=True, slots=True)
class ScrollVelocityOverlap:
    """Two consecutive scroll velocities at the same time. (current, previous)."""

    issue_type: ClassVar[AutoModIssueType] = AutoModIssueType.SCROLL_VELOCITY_OVERLAP
    level: ClassVar[AutoModIssueLevel] = AutoModIssueLevel.WARNING

    scroll_velocities: tuple[SliderVelocityInfo, SliderVelocityInfo]

    @property
    def text(self) -> str:
        return (
            f"There are multiple scroll velocities at "
            f"{_ms(self.scroll_velocities[0].start_time)}."
        )


AutoModIssue = Union[
    ShortLongNote,
    ObjectBeforeStart,
    OverlappingObjects,
    ObjectMissingInColumns,
    TimingPointOverlap,
    ScrollVelocityOverlap,
]


def is_reportable(issue: AutoModIssue) -> bool:
    """False for an ObjectMissingInColumns that lists no columns."""
    if isinstance(issue, ObjectMissingInColumns):
        return bool(issue.columns)
    return True


def _hit_object_dict(obj: HitObjectInfo) -> dict[str, Any]:
    return {"lane": obj.lane, "start_time": obj.start_time, "end_time": obj.end_time}


def issue_to_dict(issue: AutoModIssue) -> dict[str, Any]:
    """Convert an issue into a JSON-serialisable dictionary.

    Args:
        issue: Any AutoMod issue variant.

    Returns:
        Dict with ``type``, ``level`` and ``text`` keys plus the
        variant-specific entity fields.
    """
    d: dict[str, Any] = {
        "type": issue.issue_type.value,
        "level": issue.level.value,
        "text": issue.text,
    }

    if isinstance(issue, (ShortLongNote, ObjectBeforeStart)):
        d["hit_object"] = _hit_object_dict(issue.hit_object)
    elif isinstance(issue, OverlappingObjects):
        d["hit_objects"] = [_hit_object_dict(h) for h in issue.hit_objects]
    elif isinstance(issue, ObjectMissingInColumns):
        d["columns"] = list(issue.columns)
    elif isinstance(issue, TimingPointOverlap):
        d["timing_points"] = [
            {"start_time": tp.start_time, "bpm": tp.bpm} for tp in issue.timing_points
        ]
    elif isinstance(issue, ScrollVelocityOverlap):
        d["scroll_velocities"] = [
            {"start_time": sv.start_time, "multiplier": sv.multiplier}
            for sv in issue.scroll_velocities
        ]
    return d
