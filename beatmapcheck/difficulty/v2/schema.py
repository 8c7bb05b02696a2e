from dataclasses import dataclass
from typing import List, Optional

from marshmallow_dataclass import class_schema

from beatmapcheck.load_tools import BaseSchema, key


@dataclass
class Note:
    time: Optional[float] = key("_time")
    line_index: Optional[int] = key("_lineIndex")
    line_layer: Optional[int] = key("_lineLayer")
    type: Optional[int] = key("_type")
    cut_direction: Optional[int] = key("_cutDirection")


@dataclass
class Obstacle:
    time: Optional[float] = key("_time")
    line_index: Optional[int] = key("_lineIndex")
    type: Optional[int] = key("_type")
    duration: Optional[float] = key("_duration")
    width: Optional[int] = key("_width")


@dataclass
class Event:
    time: Optional[float] = key("_time")
    type: Optional[int] = key("_type")
    value: Optional[int] = key("_value")


@dataclass
class Difficulty:
    version: Optional[str] = key("_version")
    notes: Optional[List[Note]] = key("_notes")
    obstacles: Optional[List[Obstacle]] = key("_obstacles")
    events: Optional[List[Event]] = key("_events")


DIFFICULTY_SCHEMA = class_schema(Difficulty, base_schema=BaseSchema)()
