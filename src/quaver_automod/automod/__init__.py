"""AutoMod quality checks, issue records and thresholds."""

from quaver_automod.automod.automod import AutoMod, InvalidLaneError
from quaver_automod.automod.config import AutoModConfig, ConfigError, load_config
from quaver_automod.automod.issues import (
    AutoModIssue,
    AutoModIssueLevel,
    AutoModIssueType,
    ObjectBeforeStart,
    ObjectMissingInColumns,
    OverlappingObjects,
    ScrollVelocityOverlap,
    ShortLongNote,
    TimingPointOverlap,
    is_reportable,
    issue_to_dict,
)

__all__ = [
    # AutoMod
    "AutoMod",
    "InvalidLaneError",
    # Config
    "AutoModConfig",
    "ConfigError",
    "load_config",
    # Issues
    "AutoModIssue",
    "AutoModIssueLevel",
    "AutoModIssueType",
    "ObjectBeforeStart",
    "ObjectMissingInColumns",
    "OverlappingObjects",
    "ScrollVelocityOverlap",
    "ShortLongNote",
    "TimingPointOverlap",
    "is_reportable",
    "issue_to_dict",
]
