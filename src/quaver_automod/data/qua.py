"""Quaver .qua map model and parser.

A .qua file is a YAML document. Only the parts the AutoMod passes need are
modelled here: metadata, key mode, timing points, slider velocities and
hit objects.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)


class QuaParseError(ValueError):
    """Raised when a .qua file cannot be read or is malformed."""


class GameMode(enum.Enum):
    """Key mode of a map (Quaver `Mode` field)."""

    KEYS4 = "Keys4"
    KEYS7 = "Keys7"


# ---------------------------------------------------------------------------
# Dataclasses — fields mirror the .qua keys
# ---------------------------------------------------------------------------


# eq=False: two notes with identical fields are still different objects.
@dataclass(slots=True, eq=False)
class HitObjectInfo:
    """A single note or long note."""

    start_time: int  # StartTime (ms)
    lane: int  # Lane, 1-indexed
    end_time: int | None = None  # EndTime (ms), None for a regular note
    hit_sound: str = ""  # HitSound
    key_sounds: list[int] = field(default_factory=list)  # KeySounds sample indices

    @property
    def is_long_note(self) -> bool:
        return self.end_time is not None


@dataclass(slots=True, eq=False)
class TimingPointInfo:
    """A BPM change (TimingPoints)."""

    start_time: float  # StartTime (ms)
    bpm: float = 0.0  # Bpm


@dataclass(slots=True, eq=False)
class SliderVelocityInfo:
    """A scroll velocity change (SliderVelocities)."""

    start_time: float  # StartTime (ms)
    multiplier: float = 1.0  # Multiplier


@dataclass(slots=True)
class Qua:
    """All parsed content of a single .qua difficulty."""

    mode: GameMode = GameMode.KEYS4
    title: str = ""
    artist: str = ""
    creator: str = ""
    difficulty_name: str = ""
    audio_file: str = ""
    map_id: int = -1
    map_set_id: int = -1
    has_scratch_key: bool = False
    hit_objects: list[HitObjectInfo] = field(default_factory=list)
    timing_points: list[TimingPointInfo] = field(default_factory=list)
    slider_velocities: list[SliderVelocityInfo] = field(default_factory=list)
    # Overrides the mode-derived lane count when set (tests, custom key counts)
    key_count: int | None = None

    def get_key_count(self, include_scratch: bool = True) -> int:
        """Number of lanes in the map.

        Args:
            include_scratch: Count the scratch lane of a Keys7 map with
                HasScratchKey set.

        Returns:
            Lane count; the explicit ``key_count`` override wins if present.
        """
        if self.key_count is not None:
            return self.key_count

        count = 4 if self.mode is GameMode.KEYS4 else 7
        if include_scratch and self.has_scratch_key:
            count += 1
        return count


# ---------------------------------------------------------------------------
# Parsers
# ---------------------------------------------------------------------------


def parse_qua(path: Path | str) -> Qua:
    """Parse a Quaver .qua file.

    Args:
        path: Path to the .qua file.

    Returns:
        Qua with metadata and all map objects.

    Raises:
        QuaParseError: If the file is missing or not a valid .qua document.
    """
    path = Path(path)
    if not path.is_file():
        raise QuaParseError(f"Map file not found: {path}")

    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise QuaParseError(f"Failed to read {path}: {e}") from e

    qua = parse_qua_yaml(text)
    logger.debug(
        "Parsed %s: %d hit objects, %d timing points, %d SVs",
        path.name,
        len(qua.hit_objects),
        len(qua.timing_points),
        len(qua.slider_velocities),
    )
    return qua


def parse_qua_yaml(text: str) -> Qua:
    """Parse the YAML text of a .qua file.

    Args:
        text: Raw file contents.

    Returns:
        Parsed Qua.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise QuaParseError(f"Malformed .qua YAML: {e}") from e

    if not isinstance(data, dict):
        raise QuaParseError(".qua document must be a YAML mapping at the top level")
    return parse_qua_dict(data)


def parse_qua_dict(data: dict[str, Any]) -> Qua:
    """Build a Qua from an already-loaded .qua mapping.

    Args:
        data: Parsed YAML dictionary.

    Returns:
        Parsed Qua.
    """
    mode_name = data.get("Mode", GameMode.KEYS4.value)
    try:
        mode = GameMode(mode_name)
    except ValueError as e:
        raise QuaParseError(f"Unsupported game mode: {mode_name!r}") from e

    try:
        return Qua(
            mode=mode,
            title=str(data.get("Title") or ""),
            artist=str(data.get("Artist") or ""),
            creator=str(data.get("Creator") or ""),
            difficulty_name=str(data.get("DifficultyName") or ""),
            audio_file=str(data.get("AudioFile") or ""),
            map_id=int(data.get("MapId", -1)),
            map_set_id=int(data.get("MapSetId", -1)),
            has_scratch_key=bool(data.get("HasScratchKey", False)),
            hit_objects=[_parse_hit_object(h) for h in data.get("HitObjects") or []],
            timing_points=[_parse_timing_point(t) for t in data.get("TimingPoints") or []],
            slider_velocities=[
                _parse_slider_velocity(s) for s in data.get("SliderVelocities") or []
            ],
        )
    except (TypeError, ValueError, AttributeError) as e:
        raise QuaParseError(f"Invalid .qua object: {e}") from e


# ---------------------------------------------------------------------------
# Internal parsers for each object type
# ---------------------------------------------------------------------------


def _parse_hit_object(d: dict[str, Any]) -> HitObjectInfo:
    # Quaver writes EndTime: 0 (or omits it) for regular notes
    end_time = int(d.get("EndTime") or 0)
    return HitObjectInfo(
        start_time=int(d.get("StartTime", 0)),
        lane=int(d.get("Lane", 0)),
        end_time=end_time if end_time > 0 else None,
        hit_sound=str(d.get("HitSound") or ""),
        key_sounds=[int(k.get("Sample", 0)) for k in d.get("KeySounds") or []],
    )


def _parse_timing_point(d: dict[str, Any]) -> TimingPointInfo:
    return TimingPointInfo(
        start_time=float(d.get("StartTime", 0)),
        bpm=float(d.get("Bpm", 0)),
    )


def _parse_slider_velocity(d: dict[str, Any]) -> SliderVelocityInfo:
    return SliderVelocityInfo(
        start_time=float(d.get("StartTime", 0)),
        multiplier=float(d.get("Multiplier", 1.0)),
    )
