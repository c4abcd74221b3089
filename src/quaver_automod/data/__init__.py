"""Quaver map model and .qua parsing."""

from quaver_automod.data.qua import (
    GameMode,
    HitObjectInfo,
    Qua,
    QuaParseError,
    SliderVelocityInfo,
    TimingPointInfo,
    parse_qua,
    parse_qua_dict,
    parse_qua_yaml,
)

__all__ = [
    "GameMode",
    "HitObjectInfo",
    "Qua",
    "QuaParseError",
    "SliderVelocityInfo",
    "TimingPointInfo",
    "parse_qua",
    "parse_qua_dict",
    "parse_qua_yaml",
]
