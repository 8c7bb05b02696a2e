from dataclasses import dataclass
from typing import List, Optional

from marshmallow_dataclass import class_schema

from beatmapcheck.load_tools import BaseSchema, key


@dataclass
class BPMEvent:
    beat: Optional[float] = key("b")
    bpm: Optional[float] = key("m")


@dataclass
class RotationEvent:
    beat: Optional[float] = key("b")
    execution_time: Optional[int] = key("e")
    rotation: Optional[float] = key("r")


@dataclass
class ColorNote:
    beat: Optional[float] = key("b")
    x: Optional[int] = key("x")
    y: Optional[int] = key("y")
    color: Optional[int] = key("c")
    direction: Optional[int] = key("d")
    angle: Optional[int] = key("a")


@dataclass
class BombNote:
    beat: Optional[float] = key("b")
    x: Optional[int] = key("x")
    y: Optional[int] = key("y")


@dataclass
class Obstacle:
    beat: Optional[float] = key("b")
    x: Optional[int] = key("x")
    y: Optional[int] = key("y")
    duration: Optional[float] = key("d")
    width: Optional[int] = key("w")
    height: Optional[int] = key("h")


@dataclass
class Slider:
    """Arc between a head and a tail note"""

    beat: Optional[float] = key("b")
    color: Optional[int] = key("c")
    x: Optional[int] = key("x")
    y: Optional[int] = key("y")
    direction: Optional[int] = key("d")
    head_control_point_length_multiplier: Optional[float] = key("mu")
    tail_beat: Optional[float] = key("tb")
    tail_x: Optional[int] = key("tx")
    tail_y: Optional[int] = key("ty")
    tail_cut_direction: Optional[int] = key("tc")
    tail_control_point_length_multiplier: Optional[float] = key("tmu")
    slider_mid_anchor_mode: Optional[int] = key("m")


@dataclass
class BurstSlider:
    """Chain of slices starting from a head note"""

    beat: Optional[float] = key("b")
    color: Optional[int] = key("c")
    x: Optional[int] = key("x")
    y: Optional[int] = key("y")
    direction: Optional[int] = key("d")
    tail_beat: Optional[float] = key("tb")
    tail_x: Optional[int] = key("tx")
    tail_y: Optional[int] = key("ty")
    slice_count: Optional[int] = key("sc")
    squish_amount: Optional[float] = key("s")


@dataclass
class BasicEvent:
    beat: Optional[float] = key("b")
    event_type: Optional[int] = key("et")
    value: Optional[int] = key("i")
    float_value: Optional[float] = key("f")


@dataclass
class Difficulty:
    version: Optional[str] = None
    bpm_events: Optional[List[BPMEvent]] = key("bpmEvents")
    rotation_events: Optional[List[RotationEvent]] = key("rotationEvents")
    color_notes: Optional[List[ColorNote]] = key("colorNotes")
    bomb_notes: Optional[List[BombNote]] = key("bombNotes")
    obstacles: Optional[List[Obstacle]] = key("obstacles")
    sliders: Optional[List[Slider]] = key("sliders")
    burst_sliders: Optional[List[BurstSlider]] = key("burstSliders")
    basic_events: Optional[List[BasicEvent]] = key("basicBeatmapEvents")


DIFFICULTY_SCHEMA = class_schema(Difficulty, base_schema=BaseSchema)()
