"""
Info.dat : decoding and validation of the map metadata, plus the validation
of every difficulty file it declares
"""

from .schema import INFO_SCHEMA, DifficultyBeatmap, DifficultyBeatmapSet, MapInfo
from .validate import validate_map_info
