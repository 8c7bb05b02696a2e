from pathlib import Path
from typing import List, Optional, Set, Tuple

from marshmallow import ValidationError

from beatmapcheck.context import ExtractedInfo
from beatmapcheck.files import (
    DIFFICULTY_SIZE_LIMIT,
    declared_files,
    make_folder_resolver,
    read_file,
)
from beatmapcheck.info.schema import INFO_SCHEMA, MapInfo
from beatmapcheck.info.validate import validate_map_info
from beatmapcheck.load_tools import load_json_object
from beatmapcheck.probes import probe_audio, probe_image
from beatmapcheck.typing import AudioProbe, FileResolver, ImageProbe
from beatmapcheck.violations import (
    Constraint,
    ConstraintViolation,
    file_prefix,
    violations_from_errors,
)

INFO_FILENAME = "Info.dat"


def load_map_info(data: bytes) -> Tuple[Optional[MapInfo], List[ConstraintViolation]]:
    """Decodes Info.dat, a file that cannot be decoded is reported as
    FileFormat violations under its name"""
    prefix = file_prefix(INFO_FILENAME)
    try:
        map_info: MapInfo = INFO_SCHEMA.load(load_json_object(data))
    except ValidationError as e:
        return None, [v.with_prefix(prefix) for v in violations_from_errors(e.messages)]
    except ValueError as e:
        return None, [ConstraintViolation(prefix, str(e), Constraint.FILE_FORMAT)]
    return map_info, []


def check_package(
    files: Set[str],
    get_file: FileResolver,
    audio_probe: AudioProbe = probe_audio,
    image_probe: ImageProbe = probe_image,
    size_limit: int = DIFFICULTY_SIZE_LIMIT,
) -> Tuple[ExtractedInfo, List[ConstraintViolation]]:
    """Runs the whole validation on a package given its file listing. The hash
    in the returned info covers Info.dat then each difficulty file. The size
    limit applies to Info.dat and to every difficulty file"""
    info = ExtractedInfo()
    data: Optional[bytes] = None
    if INFO_FILENAME.lower() in files:
        data = read_file(get_file, INFO_FILENAME, limit=size_limit)

    if data is None:
        return info, [ConstraintViolation(INFO_FILENAME, None, Constraint.IN_FILES)]

    info.md.update(data)
    map_info, violations = load_map_info(data)
    if map_info is None:
        return info, violations

    return info, validate_map_info(
        map_info,
        files,
        info,
        get_file,
        audio_probe=audio_probe,
        image_probe=image_probe,
        size_limit=size_limit,
    )


def check_folder(
    folder: Path, size_limit: int = DIFFICULTY_SIZE_LIMIT
) -> Tuple[ExtractedInfo, List[ConstraintViolation]]:
    if not folder.is_dir():
        raise ValueError(f"{folder} is not a folder")

    return check_package(
        declared_files(folder), make_folder_resolver(folder), size_limit=size_limit
    )
