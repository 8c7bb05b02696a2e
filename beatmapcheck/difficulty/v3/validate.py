from functools import partial
from typing import List, Optional

from beatmapcheck.context import ExtractedInfo
from beatmapcheck.violations import (
    VERSION_PATTERN,
    Constraint,
    ConstraintViolation,
    Property,
    Validator,
)

from . import schema as v3

COLORS = (0, 1)
EXECUTION_TIMES = (0, 1)


def valid_cut_direction(direction: int) -> bool:
    return 0 <= direction <= 8


def in_song(beat: Property, max_beat: Optional[float]) -> Property:
    if max_beat is not None:
        beat.between(0, max_beat)
    return beat


def validate_v3(body: v3.Difficulty, info: ExtractedInfo) -> List[ConstraintViolation]:
    max_beat = info.max_beat()
    v = Validator()
    v.validate("version", body.version).not_null().matches(VERSION_PATTERN)
    v.validate("bpmEvents", body.bpm_events).not_null().for_each(validate_bpm_event)
    v.validate("rotationEvents", body.rotation_events).not_null().for_each(
        validate_rotation_event
    )
    v.validate("colorNotes", body.color_notes).not_null().for_each(
        partial(validate_color_note, max_beat=max_beat)
    )
    v.validate("bombNotes", body.bomb_notes).not_null().for_each(validate_bomb)
    v.validate("obstacles", body.obstacles).not_null().for_each(validate_obstacle)
    v.validate("sliders", body.sliders).not_null().for_each(validate_slider)
    v.validate("burstSliders", body.burst_sliders).not_null().for_each(
        partial(validate_burst_slider, max_beat=max_beat)
    )
    v.validate("basicBeatmapEvents", body.basic_events).not_null().for_each(
        validate_basic_event
    )
    return v.violations


def validate_bpm_event(v: Validator, event: v3.BPMEvent) -> None:
    v.validate("bpm", event.bpm).not_null()
    v.validate("beat", event.beat).not_null()


def validate_rotation_event(v: Validator, event: v3.RotationEvent) -> None:
    v.validate("executionTime", event.execution_time).not_null().is_in(
        *EXECUTION_TIMES
    )
    v.validate("beat", event.beat).not_null()
    v.validate("rotation", event.rotation).not_null()


def validate_color_note(
    v: Validator, note: v3.ColorNote, max_beat: Optional[float]
) -> None:
    v.validate("color", note.color).not_null().is_in(*COLORS)
    v.validate("direction", note.direction).not_null().check(
        Constraint.CUT_DIRECTION, valid_cut_direction
    )
    in_song(v.validate("beat", note.beat).not_null(), max_beat)
    v.validate("x", note.x).not_null()
    v.validate("y", note.y).not_null()
    v.validate("angle", note.angle).not_null()


def validate_bomb(v: Validator, bomb: v3.BombNote) -> None:
    v.validate("beat", bomb.beat).not_null()
    v.validate("x", bomb.x).not_null()
    v.validate("y", bomb.y).not_null()


def validate_obstacle(v: Validator, obstacle: v3.Obstacle) -> None:
    v.validate("duration", obstacle.duration).not_null()
    v.validate("beat", obstacle.beat).not_null()
    v.validate("x", obstacle.x).not_null()
    v.validate("y", obstacle.y).not_null()
    v.validate("width", obstacle.width).not_null()
    v.validate("height", obstacle.height).not_null()


def validate_slider(v: Validator, slider: v3.Slider) -> None:
    v.validate("beat", slider.beat).not_null()
    v.validate("color", slider.color).not_null().is_in(*COLORS)
    v.validate("x", slider.x).not_null()
    v.validate("y", slider.y).not_null()
    v.validate("direction", slider.direction).not_null()
    v.validate("tailBeat", slider.tail_beat).not_null()
    v.validate("tailX", slider.tail_x).not_null()
    v.validate("tailY", slider.tail_y).not_null()
    v.validate(
        "headControlPointLengthMultiplier",
        slider.head_control_point_length_multiplier,
    ).not_null()
    v.validate(
        "tailControlPointLengthMultiplier",
        slider.tail_control_point_length_multiplier,
    ).not_null()
    v.validate("tailCutDirection", slider.tail_cut_direction).not_null()
    v.validate("sliderMidAnchorMode", slider.slider_mid_anchor_mode).not_null()


def validate_burst_slider(
    v: Validator, slider: v3.BurstSlider, max_beat: Optional[float]
) -> None:
    in_song(v.validate("beat", slider.beat).not_null(), max_beat)
    v.validate("color", slider.color).not_null().is_in(*COLORS)
    v.validate("x", slider.x).not_null()
    v.validate("y", slider.y).not_null()
    v.validate("direction", slider.direction).not_null()
    in_song(v.validate("tailBeat", slider.tail_beat).not_null(), max_beat)
    v.validate("tailX", slider.tail_x).not_null()
    v.validate("tailY", slider.tail_y).not_null()
    v.validate("sliceCount", slider.slice_count).not_null()
    v.validate("squishAmount", slider.squish_amount).not_null()


def validate_basic_event(v: Validator, event: v3.BasicEvent) -> None:
    v.validate("beat", event.beat).not_null()
    v.validate("eventType", event.event_type).not_null()
    v.validate("value", event.value).not_null()
    v.validate("floatValue", event.float_value).not_null()
