"""
Difficulty files, the per-difficulty gameplay data referenced from Info.dat

Two incompatible generations of the format exist in the wild, they are told
apart by the presence of a "version" key at the top level
"""

from .load import (
    DifficultyBody,
    Version,
    load_difficulty,
    load_raw_difficulty,
    recognize_difficulty_version,
)
from .validate import validate_difficulty
