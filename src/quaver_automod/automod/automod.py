"""Automatic quality checks for a parsed Quaver map.

``AutoMod.run()`` scans the map in three independent passes and collects
the problems it finds in ``AutoMod.issues``:
    - Hit objects: short long notes, objects before the audio starts,
      overlapping objects, columns with no objects
    - Timing points: multiple timing points at the same time
    - Scroll velocities: multiple scroll velocities at the same time

A single instance is not safe to ``run()`` from several threads at once.
"""

from __future__ import annotations

import logging

from quaver_automod.automod.config import AutoModConfig
from quaver_automod.automod.issues import (
    AutoModIssue,
    AutoModIssueLevel,
    ObjectBeforeStart,
    ObjectMissingInColumns,
    OverlappingObjects,
    ScrollVelocityOverlap,
    ShortLongNote,
    TimingPointOverlap,
    is_reportable,
)
from quaver_automod.data.qua import HitObjectInfo, Qua

logger = logging.getLogger(__name__)


class InvalidLaneError(ValueError):
    """A hit object's lane lies outside 1..key_count."""

    def __init__(self, hit_object: HitObjectInfo, key_count: int) -> None:
        super().__init__(
            f"Hit object at {hit_object.start_time} ms has lane {hit_object.lane}, "
            f"expected 1..{key_count}"
        )
        self.hit_object = hit_object
        self.key_count = key_count


class AutoMod:
    """Runs every AutoMod check over one map."""

    def __init__(self, qua: Qua, config: AutoModConfig | None = None) -> None:
        self.qua = qua
        self.config = config or AutoModConfig()
        self._issues: list[AutoModIssue] = []

    @property
    def issues(self) -> list[AutoModIssue]:
        """Issues found by the last ``run()``; empty before the first one."""
        return self._issues

    @property
    def has_critical_issues(self) -> bool:
        """Whether the last run found a critical issue, ignoring an empty ObjectMissingInColumns."""
        return any(
            issue.level is AutoModIssueLevel.CRITICAL and is_reportable(issue)
            for issue in self._issues
        )

    def run(self) -> None:
        """Run all checks, replacing the issues of any previous run.

        Raises:
            InvalidLaneError: If a hit object lies outside the map's lanes.
                No issues are kept in that case.
        """
        self._issues = []
        self._validate_lanes()

        issues: list[AutoModIssue] = []
        self._detect_hit_object_issues(issues)
        self._detect_timing_point_issues(issues)
        self._detect_scroll_velocity_issues(issues)

        self._issues = issues
        logger.info(
            "AutoMod found %d issue(s) in '%s' [%s]",
            sum(1 for issue in issues if is_reportable(issue)),
            self.qua.title,
            self.qua.difficulty_name,
        )

    def _validate_lanes(self) -> None:
        key_count = self.qua.get_key_count()
        for hit_object in self.qua.hit_objects:
            if not 1 <= hit_object.lane <= key_count:
                raise InvalidLaneError(hit_object, key_count)

    # ------------------------------------------------------------------
    # Hit objects
    # ------------------------------------------------------------------

    def _detect_hit_object_issues(self, issues: list[AutoModIssue]) -> None:
        key_count = self.qua.get_key_count()
        short_ln = self.config.short_long_note_threshold
        overlap = self.config.overlapping_objects_threshold

        # Most recent object seen in each lane, indexed by lane - 1
        previous_in_columns: list[HitObjectInfo | None] = [None] * max(key_count, 0)

        for index, hit_object in enumerate(self.qua.hit_objects):
            lane_index = hit_object.lane - 1

            if (
                hit_object.is_long_note
                and abs(hit_object.end_time - hit_object.start_time) <= short_ln
            ):
                issues.append(ShortLongNote(hit_object))

            if hit_object.start_time < 0 or (hit_object.is_long_note and hit_object.end_time < 0):
                issues.append(ObjectBeforeStart(hit_object))

            # The first object of the map has nothing to be compared against
            is_first_in_map = index == 0
            previous = previous_in_columns[lane_index]
            previous_in_columns[lane_index] = hit_object

            if is_first_in_map or previous is None:
                continue

            if abs(hit_object.start_time - previous.start_time) <= overlap:
                issues.append(OverlappingObjects((hit_object, previous)))

            if previous.is_long_note:
                # On the previous long note's release
                if abs(hit_object.start_time - previous.end_time) <= overlap:
                    issues.append(OverlappingObjects((hit_object, previous)))

                # Inside the previous long note
                if previous.start_time <= hit_object.start_time <= previous.end_time:
                    issues.append(OverlappingObjects((hit_object, previous)))

        missing = tuple(
            lane_index + 1
            for lane_index, previous in enumerate(previous_in_columns)
            if previous is None
        )
        if missing:
            logger.debug("Columns without objects: %s", missing)
        issues.append(ObjectMissingInColumns(missing))

    # ------------------------------------------------------------------
    # Timing points and scroll velocities
    # ------------------------------------------------------------------

    def _detect_timing_point_issues(self, issues: list[AutoModIssue]) -> None:
        points = self.qua.timing_points
        for previous, current in zip(points, points[1:]):
            if current.start_time == previous.start_time:
                logger.debug("Duplicate timing point at %s", current.start_time)
                issues.append(TimingPointOverlap((current, previous)))

    def _detect_scroll_velocity_issues(self, issues: list[AutoModIssue]) -> None:
        velocities = self.qua.slider_velocities
        for previous, current in zip(velocities, velocities[1:]):
            if current.start_time == previous.start_time:
                logger.debug("Duplicate scroll velocity at %s", current.start_time)
                issues.append(ScrollVelocityOverlap((current, previous)))
