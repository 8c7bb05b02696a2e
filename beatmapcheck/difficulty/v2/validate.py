from functools import partial
from typing import List, Optional

from beatmapcheck.context import ExtractedInfo
from beatmapcheck.violations import (
    VERSION_PATTERN,
    Constraint,
    ConstraintViolation,
    Validator,
)

from . import schema as v2

NOTE_TYPES = (0, 1, 3)


def valid_cut_direction(direction: int) -> bool:
    """The 8 directions and "any" (8), plus a range of values used by mods
    that is accepted as is"""
    return 0 <= direction <= 8 or 1000 <= direction <= 1360


def validate_v2(body: v2.Difficulty, info: ExtractedInfo) -> List[ConstraintViolation]:
    v = Validator()
    v.validate("_version", body.version).not_null().matches(VERSION_PATTERN)
    v.validate("_notes", body.notes).not_null().for_each(
        partial(validate_note, max_beat=info.max_beat())
    )
    v.validate("_obstacles", body.obstacles).not_null().for_each(validate_obstacle)
    v.validate("_events", body.events).not_null().for_each(validate_event)
    return v.violations


def validate_note(v: Validator, note: v2.Note, max_beat: Optional[float]) -> None:
    v.validate("_type", note.type).not_null().is_in(*NOTE_TYPES)
    v.validate("_cutDirection", note.cut_direction).not_null().check(
        Constraint.CUT_DIRECTION, valid_cut_direction
    )
    time = v.validate("_time", note.time).not_null()
    if max_beat is not None:
        time.between(0, max_beat)
    v.validate("_lineIndex", note.line_index).not_null()
    v.validate("_lineLayer", note.line_layer).not_null()


def validate_obstacle(v: Validator, obstacle: v2.Obstacle) -> None:
    v.validate("_type", obstacle.type).not_null()
    v.validate("_duration", obstacle.duration).not_null()
    v.validate("_time", obstacle.time).not_null()
    v.validate("_lineIndex", obstacle.line_index).not_null()
    v.validate("_width", obstacle.width).not_null()


def validate_event(v: Validator, event: v2.Event) -> None:
    v.validate("_time", event.time).not_null()
    v.validate("_type", event.type).not_null()
    v.validate("_value", event.value).not_null()
