from enum import Enum
from typing import Any, Dict, Union

from beatmapcheck.load_tools import load_json_object

from .v2 import schema as v2
from .v3 import schema as v3

DifficultyBody = Union[v2.Difficulty, v3.Difficulty]


class Version(str, Enum):
    LEGACY = "v2"
    CURRENT = "v3"


def recognize_difficulty_version(obj: Any) -> Version:
    if not isinstance(obj, dict):
        raise ValueError("Top level value is not an object")

    if "version" in obj:
        return Version.CURRENT
    else:
        return Version.LEGACY


def load_raw_difficulty(raw: Dict[str, Any]) -> DifficultyBody:
    """Raises marshmallow.ValidationError if a known key holds a value of the
    wrong type"""
    version = recognize_difficulty_version(raw)
    if version == Version.CURRENT:
        current: v3.Difficulty = v3.DIFFICULTY_SCHEMA.load(raw)
        return current
    else:
        legacy: v2.Difficulty = v2.DIFFICULTY_SCHEMA.load(raw)
        return legacy


def load_difficulty(data: bytes) -> DifficultyBody:
    """Raises ValueError if the bytes are not a JSON object and
    marshmallow.ValidationError if the object has badly typed values"""
    return load_raw_difficulty(load_json_object(data))
