from functools import partial
from itertools import takewhile
from typing import Iterable, List, Optional, Set

from marshmallow import ValidationError

from beatmapcheck.context import ExtractedInfo
from beatmapcheck.difficulty import load_difficulty, validate_difficulty
from beatmapcheck.enum import (
    DIFFICULTY_RANKS,
    Characteristic,
    Difficulty,
    search_enum,
)
from beatmapcheck.files import DIFFICULTY_SIZE_LIMIT, read_file
from beatmapcheck.probes import probe_audio, probe_image
from beatmapcheck.typing import AudioProbe, FileResolver, ImageInfo, ImageProbe
from beatmapcheck.utils import none_or
from beatmapcheck.violations import (
    VERSION_PATTERN,
    Constraint,
    ConstraintViolation,
    Property,
    Validator,
    file_prefix,
    violations_from_errors,
)

from .schema import DifficultyBeatmap, DifficultyBeatmapSet, MapCustomData, MapInfo

MIN_BPM = 10
MAX_BPM = 1000
MAX_METADATA_LENGTH = 100
IMAGE_FORMATS = ("jpeg", "jpg", "png")
MIN_IMAGE_SIZE = 256
ALL_DIRECTIONS_ENVIRONMENT = "GlassDesertEnvironment"

# Keys that belong in the custom data of a difficulty, mappers sometimes put
# them at the wrong level
RESERVED_CUSTOM_DATA_KEYS = (
    "_warnings",
    "_information",
    "_suggestions",
    "_requirements",
    "_difficultyLabel",
    "_envColorLeft",
    "_envColorRight",
    "_colorLeft",
    "_colorRight",
)


def validate_map_info(
    map_info: MapInfo,
    files: Set[str],
    info: ExtractedInfo,
    get_file: FileResolver,
    audio_probe: AudioProbe = probe_audio,
    image_probe: ImageProbe = probe_image,
    size_limit: int = DIFFICULTY_SIZE_LIMIT,
) -> List[ConstraintViolation]:
    """Validates Info.dat and every difficulty file it references.

    `files` holds the lowercased names of the files present in the package,
    `get_file` gives access to their contents. What is learned along the way
    (audio duration, thumbnail, decoded difficulties, hash) is stored in
    `info`"""
    info.map_info = map_info
    v = Validator()

    v.validate("_version", map_info.version).not_null().matches(VERSION_PATTERN)
    v.validate("_songName", map_info.song_name).not_null().not_blank().check(
        Constraint.METADATA_LENGTH, lambda _: metadata_length_is_valid(map_info)
    )
    v.validate("_beatsPerMinute", map_info.beats_per_minute).not_null().between(
        MIN_BPM, MAX_BPM
    )
    v.validate("_previewStartTime", map_info.preview_start_time).positive_or_zero()
    v.validate("_previewDuration", map_info.preview_duration).positive_or_zero()

    song = v.validate("_songFilename", map_info.song_filename)
    song_data = fetch(song, files, get_file)
    info.duration = none_or(audio_probe, song_data)
    if song_data is not None:
        song.check(Constraint.AUDIO_FORMAT, lambda _: audio_is_valid(info.duration))

    cover = v.validate("_coverImageFilename", map_info.cover_image_filename)
    cover_data = fetch(cover, files, get_file)
    image = none_or(partial(image_probe, info=info), cover_data)
    if cover_data is not None:
        cover.check(Constraint.IMAGE_FORMAT, lambda _: image_format_is_valid(image))
        if image is not None:
            cover.check(Constraint.IMAGE_SQUARE, lambda _: image.width == image.height)
            cover.check(
                Constraint.IMAGE_SIZE,
                lambda _: min(image.width, image.height) >= MIN_IMAGE_SIZE,
            )

    v.validate("_customData", map_info.custom_data).nested(validate_custom_data)
    v.validate(
        "_allDirectionsEnvironmentName", map_info.all_directions_environment_name
    ).is_equal_to(ALL_DIRECTIONS_ENVIRONMENT)
    v.validate("_songTimeOffset", map_info.song_time_offset).is_zero()
    v.validate("_difficultyBeatmapSets", map_info.difficulty_beatmap_sets).for_each(
        partial(
            validate_difficulty_set,
            files=files,
            get_file=get_file,
            info=info,
            size_limit=size_limit,
        )
    )
    return v.violations


def in_files(name: Optional[str], files: Set[str]) -> bool:
    return name is not None and name.lower() in files


def fetch(
    filename: Property,
    files: Set[str],
    get_file: FileResolver,
    limit: Optional[int] = None,
) -> Optional[bytes]:
    """Contents of the file the property names. A file missing from the
    listing or that the resolver cannot open is an InFiles violation and gives
    None"""
    filename.not_null().in_files(files)
    if not in_files(filename.value, files):
        return None

    data = read_file(get_file, filename.value, limit=limit)
    if data is None:
        filename.check(Constraint.IN_FILES, lambda _: False)
    return data


def metadata_length_is_valid(map_info: MapInfo) -> bool:
    song_name = map_info.song_name or ""
    level_author_name = map_info.level_author_name or ""
    return len(song_name) + len(level_author_name) <= MAX_METADATA_LENGTH


def audio_is_valid(duration: Optional[float]) -> bool:
    return duration is not None and duration > 0


def image_format_is_valid(image: Optional[ImageInfo]) -> bool:
    return image is not None and image.format in IMAGE_FORMATS


def misplaced_custom_data(v: Validator, keys: Iterable[str]) -> None:
    for key in RESERVED_CUSTOM_DATA_KEYS:
        if key in keys:
            v.add(ConstraintViolation(key, None, Constraint.MISPLACED_CUSTOM_DATA))


def validate_custom_data(v: Validator, custom_data: MapCustomData) -> None:
    misplaced_custom_data(v, custom_data.additional_information.keys())


def validate_difficulty_set(
    v: Validator,
    beatmap_set: DifficultyBeatmapSet,
    files: Set[str],
    get_file: FileResolver,
    info: ExtractedInfo,
    size_limit: int = DIFFICULTY_SIZE_LIMIT,
) -> None:
    v.validate(
        "_beatmapCharacteristicName", beatmap_set.characteristic_name
    ).not_null().is_in(*(c.value for c in Characteristic))
    v.validate("_difficultyBeatmaps", beatmap_set.difficulty_beatmaps).for_each(
        partial(
            validate_difficulty_beatmap,
            beatmap_set=beatmap_set,
            files=files,
            get_file=get_file,
            info=info,
            size_limit=size_limit,
        )
    )


def is_duplicate(
    beatmap: DifficultyBeatmap, beatmap_set: DifficultyBeatmapSet
) -> bool:
    """Only difficulties declared before this one count, the first occurrence
    of a name is never a duplicate"""
    if beatmap.difficulty is None:
        return False

    name = beatmap.difficulty.lower()
    earlier = takewhile(
        lambda other: other is not beatmap, beatmap_set.difficulty_beatmaps or []
    )
    return any(
        other.difficulty is not None and other.difficulty.lower() == name
        for other in earlier
    )


def validate_difficulty_beatmap(
    v: Validator,
    beatmap: DifficultyBeatmap,
    beatmap_set: DifficultyBeatmapSet,
    files: Set[str],
    get_file: FileResolver,
    info: ExtractedInfo,
    size_limit: int = DIFFICULTY_SIZE_LIMIT,
) -> None:
    misplaced_custom_data(v, beatmap.additional_information.keys())

    difficulty = v.validate("_difficulty", beatmap.difficulty).not_null()
    difficulty.check(Constraint.IN, lambda d: search_enum(Difficulty, d) is not None)
    if is_duplicate(beatmap, beatmap_set):
        difficulty.check(Constraint.UNIQUE_DIFF, lambda _: False)

    v.validate("_difficultyRank", beatmap.difficulty_rank).not_null().is_in(
        *DIFFICULTY_RANKS.values()
    )

    filename = v.validate("_beatmapFilename", beatmap.beatmap_filename)
    data = fetch(filename, files, get_file, limit=size_limit)
    if data is not None:
        v.merge(
            validate_difficulty_file(data, beatmap, beatmap_set, info),
            prefix=file_prefix(filename.value),
        )


def validate_difficulty_file(
    data: bytes,
    beatmap: DifficultyBeatmap,
    beatmap_set: DifficultyBeatmapSet,
    info: ExtractedInfo,
) -> List[ConstraintViolation]:
    """Hashes, decodes and validates the contents of one difficulty file.
    Returns violations relative to the file"""
    info.md.update(data)

    try:
        body = load_difficulty(data)
    except ValidationError as e:
        return violations_from_errors(e.messages)
    except ValueError as e:
        return [ConstraintViolation("", str(e), Constraint.FILE_FORMAT)]

    info.add_difficulty(beatmap_set.characteristic_name, beatmap.difficulty, body)
    return validate_difficulty(body, info)
