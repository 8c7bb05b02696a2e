"""Info.dat, the metadata file at the root of every map package

Every scalar is Optional : a key missing from the file (or set to null) loads
as None and is reported by the validators, it never makes the decoding fail"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from marshmallow_dataclass import class_schema

from beatmapcheck.enum import Characteristic, Difficulty, search_enum
from beatmapcheck.load_tools import BaseSchema, extra_fields, key


@dataclass
class Contributor:
    role: Optional[str] = key("_role")
    name: Optional[str] = key("_name")
    icon_path: Optional[str] = key("_iconPath")


@dataclass
class MapEditorVersion:
    version: Optional[str] = None
    additional_information: Dict[str, Any] = extra_fields()


@dataclass
class MapEditors:
    last_edited_by: Optional[str] = key("_lastEditedBy")
    beat_sage: Optional[MapEditorVersion] = key("beatSage")
    mma2: Optional[MapEditorVersion] = key("MMA2")
    chromapper: Optional[MapEditorVersion] = key("ChroMapper")
    additional_information: Dict[str, Any] = extra_fields()


@dataclass
class MapCustomData:
    contributors: Optional[List[Contributor]] = key("_contributors")
    editors: Optional[MapEditors] = key("_editors")
    additional_information: Dict[str, Any] = extra_fields()


@dataclass
class DifficultyBeatmapCustomData:
    difficulty_label: Optional[str] = key("_difficultyLabel")
    editor_offset: Optional[int] = key("_editorOffset")
    editor_old_offset: Optional[int] = key("_editorOldOffset")
    warnings: Optional[List[str]] = key("_warnings")
    information: Optional[List[str]] = key("_information")
    suggestions: Optional[List[str]] = key("_suggestions")
    requirements: Optional[List[str]] = key("_requirements")
    additional_information: Dict[str, Any] = extra_fields()


@dataclass(eq=False)
class DifficultyBeatmap:
    difficulty: Optional[str] = key("_difficulty")
    difficulty_rank: Optional[int] = key("_difficultyRank")
    beatmap_filename: Optional[str] = key("_beatmapFilename")
    note_jump_movement_speed: Optional[float] = key("_noteJumpMovementSpeed")
    note_jump_start_beat_offset: Optional[float] = key("_noteJumpStartBeatOffset")
    custom_data: Optional[DifficultyBeatmapCustomData] = key("_customData")
    additional_information: Dict[str, Any] = extra_fields()

    def enum_value(self) -> Optional[Difficulty]:
        if self.difficulty_rank is not None:
            from_rank = Difficulty.from_rank(self.difficulty_rank)
            if from_rank is not None:
                return from_rank

        return search_enum(Difficulty, self.difficulty)


@dataclass(eq=False)
class DifficultyBeatmapSet:
    characteristic_name: Optional[str] = key("_beatmapCharacteristicName")
    difficulty_beatmaps: Optional[List[DifficultyBeatmap]] = key(
        "_difficultyBeatmaps"
    )

    def enum_value(self) -> Optional[Characteristic]:
        return search_enum(Characteristic, self.characteristic_name)


@dataclass
class MapInfo:
    version: Optional[str] = key("_version")
    song_name: Optional[str] = key("_songName")
    song_sub_name: Optional[str] = key("_songSubName")
    song_author_name: Optional[str] = key("_songAuthorName")
    level_author_name: Optional[str] = key("_levelAuthorName")
    beats_per_minute: Optional[float] = key("_beatsPerMinute")
    shuffle: Optional[float] = key("_shuffle")
    shuffle_period: Optional[float] = key("_shufflePeriod")
    preview_start_time: Optional[float] = key("_previewStartTime")
    preview_duration: Optional[float] = key("_previewDuration")
    song_filename: Optional[str] = key("_songFilename")
    cover_image_filename: Optional[str] = key("_coverImageFilename")
    environment_name: Optional[str] = key("_environmentName")
    all_directions_environment_name: Optional[str] = key(
        "_allDirectionsEnvironmentName"
    )
    song_time_offset: Optional[float] = key("_songTimeOffset")
    custom_data: Optional[MapCustomData] = key("_customData")
    difficulty_beatmap_sets: Optional[List[DifficultyBeatmapSet]] = key(
        "_difficultyBeatmapSets"
    )


INFO_SCHEMA = class_schema(MapInfo, base_schema=BaseSchema)()
