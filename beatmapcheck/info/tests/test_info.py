from typing import List

import pytest
from hypothesis import given
from hypothesis import strategies as st

from beatmapcheck.check import check_package
from beatmapcheck.info.schema import INFO_SCHEMA
from beatmapcheck.testutils.packages import (
    SQUARE_JPEG,
    check,
    fixed_audio_probe,
    fixed_image_probe,
    valid_info,
    valid_package,
)
from beatmapcheck.typing import ImageInfo
from beatmapcheck.violations import Constraint, ConstraintViolation


def on(property: str, violations: List[ConstraintViolation]) -> List[Constraint]:
    return [v.constraint for v in violations if v.property == property]


def test_that_a_valid_package_has_no_violations() -> None:
    info, violations = check(valid_package())
    assert violations == []
    assert info.duration == 180
    assert info.thumbnail == b"thumbnail"
    assert info.map_info is not None
    assert info.map_info.song_name == "Sky Bus For Hire"


@pytest.mark.parametrize("bpm", [10, 10.0, 120, 1000])
def test_that_tempo_bounds_are_inclusive(bpm: float) -> None:
    raw = valid_info()
    raw["_beatsPerMinute"] = bpm
    _, violations = check(valid_package(raw))
    assert on("_beatsPerMinute", violations) == []


@given(
    st.one_of(
        st.floats(min_value=-1e6, max_value=10, exclude_max=True),
        st.floats(min_value=1000, max_value=1e6, exclude_min=True),
    )
)
def test_that_tempos_out_of_range_are_flagged(bpm: float) -> None:
    raw = valid_info()
    raw["_beatsPerMinute"] = bpm
    _, violations = check(valid_package(raw))
    assert on("_beatsPerMinute", violations) == [Constraint.BETWEEN]


def test_that_a_missing_tempo_is_only_reported_as_missing() -> None:
    raw = valid_info()
    del raw["_beatsPerMinute"]
    _, violations = check(valid_package(raw))
    assert on("_beatsPerMinute", violations) == [Constraint.NOT_NULL]


@pytest.mark.parametrize(
    "image,expected",
    [
        (ImageInfo("png", 300, 256), [Constraint.IMAGE_SQUARE]),
        (ImageInfo("png", 100, 100), [Constraint.IMAGE_SIZE]),
        (
            ImageInfo("png", 300, 200),
            [Constraint.IMAGE_SQUARE, Constraint.IMAGE_SIZE],
        ),
        (ImageInfo("jpeg", 256, 256), []),
        (ImageInfo("jpg", 1024, 1024), []),
        (ImageInfo("gif", 512, 512), [Constraint.IMAGE_FORMAT]),
    ],
)
def test_cover_image_checks(image: ImageInfo, expected: List[Constraint]) -> None:
    _, violations = check(valid_package(), image=image)
    assert on("_coverImageFilename", violations) == expected


def test_that_an_undecodable_cover_is_only_an_image_format_problem() -> None:
    info, violations = check(valid_package(), image=None)
    assert on("_coverImageFilename", violations) == [Constraint.IMAGE_FORMAT]
    assert info.thumbnail is None


def test_that_a_missing_cover_is_not_probed() -> None:
    _, violations = check(valid_package().remove("cover.jpg"), image=None)
    assert on("_coverImageFilename", violations) == [Constraint.IN_FILES]


def test_that_undecodable_audio_is_flagged() -> None:
    info, violations = check(valid_package(), duration=None)
    assert on("_songFilename", violations) == [Constraint.AUDIO_FORMAT]
    assert info.duration is None


def test_that_zero_length_audio_is_flagged() -> None:
    _, violations = check(valid_package(), duration=0)
    assert on("_songFilename", violations) == [Constraint.AUDIO_FORMAT]


def test_that_a_missing_song_file_is_flagged() -> None:
    info, violations = check(valid_package().remove("song.egg"))
    assert on("_songFilename", violations) == [Constraint.IN_FILES]
    assert info.duration is None


def test_that_file_names_are_matched_regardless_of_case() -> None:
    raw = valid_info()
    raw["_songFilename"] = "SONG.EGG"
    raw["_coverImageFilename"] = "Cover.JPG"
    _, violations = check(valid_package(raw))
    assert violations == []


def test_that_bad_versions_are_flagged() -> None:
    raw = valid_info()
    raw["_version"] = "2.0"
    _, violations = check(valid_package(raw))
    assert violations == [ConstraintViolation("_version", "2.0", Constraint.MATCHES)]


@pytest.mark.parametrize("name", ["", "   "])
def test_that_blank_song_names_are_flagged(name: str) -> None:
    raw = valid_info()
    raw["_songName"] = name
    _, violations = check(valid_package(raw))
    assert on("_songName", violations) == [Constraint.NOT_BLANK]


def test_that_long_metadata_is_flagged() -> None:
    raw = valid_info()
    raw["_songName"] = "a" * 60
    raw["_levelAuthorName"] = "b" * 41
    _, violations = check(valid_package(raw))
    assert on("_songName", violations) == [Constraint.METADATA_LENGTH]

    raw["_levelAuthorName"] = "b" * 40
    _, violations = check(valid_package(raw))
    assert on("_songName", violations) == []


@pytest.mark.parametrize("field", ["_previewStartTime", "_previewDuration"])
def test_that_negative_preview_values_are_flagged(field: str) -> None:
    raw = valid_info()
    raw[field] = -1
    _, violations = check(valid_package(raw))
    assert on(field, violations) == [Constraint.POSITIVE_OR_ZERO]


def test_that_the_song_time_offset_must_be_zero() -> None:
    raw = valid_info()
    raw["_songTimeOffset"] = 0.5
    _, violations = check(valid_package(raw))
    assert violations == [
        ConstraintViolation("_songTimeOffset", 0.5, Constraint.ZERO)
    ]


def test_all_directions_environment() -> None:
    raw = valid_info()
    raw["_allDirectionsEnvironmentName"] = "GlassDesertEnvironment"
    _, violations = check(valid_package(raw))
    assert violations == []

    raw["_allDirectionsEnvironmentName"] = "DefaultEnvironment"
    _, violations = check(valid_package(raw))
    assert on("_allDirectionsEnvironmentName", violations) == [Constraint.EQUALS]


def test_that_difficulty_custom_data_at_the_map_level_is_misplaced() -> None:
    raw = valid_info()
    raw["_customData"]["_requirements"] = ["Mapping Extensions"]
    raw["_customData"]["_difficultyLabel"] = "Oops"
    raw["_customData"]["_somethingElse"] = 1
    _, violations = check(valid_package(raw))
    assert violations == [
        ConstraintViolation(
            "_customData._requirements", None, Constraint.MISPLACED_CUSTOM_DATA
        ),
        ConstraintViolation(
            "_customData._difficultyLabel", None, Constraint.MISPLACED_CUSTOM_DATA
        ),
    ]


def test_that_unknown_keys_are_kept() -> None:
    raw = valid_info()
    raw["_customData"]["_customEnvironment"] = "Weave"
    raw["_customData"]["_editors"]["ChroMapper"]["theme"] = "dark"
    map_info = INFO_SCHEMA.load(raw)
    assert map_info.custom_data.additional_information == {
        "_customEnvironment": "Weave"
    }
    chromapper = map_info.custom_data.editors.chromapper
    assert chromapper.version == "0.0.1"
    assert chromapper.additional_information == {"theme": "dark"}


def test_that_a_missing_info_file_is_reported() -> None:
    info, violations = check(valid_package().remove("Info.dat"))
    assert violations == [ConstraintViolation("Info.dat", None, Constraint.IN_FILES)]
    assert info.map_info is None


def test_that_an_info_file_that_is_not_json_is_a_file_format_problem() -> None:
    _, violations = check(valid_package().replace("Info.dat", b"{ nope"))
    assert len(violations) == 1
    assert violations[0].property == "`Info.dat`"
    assert violations[0].constraint == Constraint.FILE_FORMAT


def test_that_badly_typed_info_values_point_at_their_key() -> None:
    raw = valid_info()
    raw["_beatsPerMinute"] = "fast"
    _, violations = check(valid_package(raw))
    assert [(v.property, v.constraint) for v in violations] == [
        ("`Info.dat`._beatsPerMinute", Constraint.FILE_FORMAT)
    ]


def test_that_a_byte_order_mark_is_tolerated() -> None:
    package = valid_package()
    package = package.replace("Info.dat", b"\xef\xbb\xbf" + package.files["info.dat"])
    _, violations = check(package)
    assert violations == []


def test_that_unknown_keys_survive_a_dump() -> None:
    raw = valid_info()
    raw["_customData"]["_customEnvironment"] = "Weave"
    dumped = INFO_SCHEMA.dump(INFO_SCHEMA.load(raw))
    assert dumped["_customData"]["_customEnvironment"] == "Weave"
    assert dumped["_customData"]["_editors"] == raw["_customData"]["_editors"]
    assert "_allDirectionsEnvironmentName" not in dumped


def test_that_a_deeply_nested_info_file_is_a_file_format_problem() -> None:
    nested = b'{"_customData": ' + b"[" * 5000 + b"]" * 5000 + b"}"
    info, violations = check(valid_package().replace("Info.dat", nested))
    assert [(v.property, v.constraint) for v in violations] == [
        ("`Info.dat`", Constraint.FILE_FORMAT)
    ]
    assert info.map_info is None


def test_that_the_size_limit_applies_to_the_info_file() -> None:
    package = valid_package()
    limit = len(package.files["info.dat"]) - 1
    with pytest.warns(UserWarning, match="Info.dat is larger than"):
        info, violations = check_package(
            package.names,
            package.get_file,
            audio_probe=fixed_audio_probe(180),
            image_probe=fixed_image_probe(SQUARE_JPEG),
            size_limit=limit,
        )
    assert [(v.property, v.constraint) for v in violations] == [
        ("`Info.dat`", Constraint.FILE_FORMAT)
    ]
    assert info.map_info is None


@pytest.mark.parametrize("name", ["Info.dat", "song.egg", "cover.jpg"])
def test_that_listed_files_that_cannot_be_opened_are_not_in_files(
    name: str,
) -> None:
    package = valid_package().remove(name)
    _, violations = check_package(
        package.names | {name.lower()},
        package.get_file,
        audio_probe=fixed_audio_probe(180),
        image_probe=fixed_image_probe(SQUARE_JPEG),
    )
    assert [v.constraint for v in violations] == [Constraint.IN_FILES]
