"""
In-memory map packages for tests, with probes that return canned results so
no real audio or image has to be decoded
"""

import copy
from io import BytesIO
from typing import Any, BinaryIO, Dict, List, Optional, Set, Tuple

import simplejson as json

from beatmapcheck.check import check_package
from beatmapcheck.context import ExtractedInfo
from beatmapcheck.typing import AudioProbe, ImageInfo, ImageProbe
from beatmapcheck.violations import ConstraintViolation

SQUARE_JPEG = ImageInfo(format="jpeg", width=256, height=256)

VALID_INFO: Dict[str, Any] = {
    "_version": "2.0.0",
    "_songName": "Sky Bus For Hire",
    "_songSubName": "",
    "_songAuthorName": "Stepland",
    "_levelAuthorName": "Someone",
    "_beatsPerMinute": 120,
    "_shuffle": 0,
    "_shufflePeriod": 0.5,
    "_previewStartTime": 12,
    "_previewDuration": 10,
    "_songFilename": "song.egg",
    "_coverImageFilename": "cover.jpg",
    "_environmentName": "DefaultEnvironment",
    "_songTimeOffset": 0,
    "_customData": {
        "_contributors": [{"_role": "Lighter", "_name": "Someone Else"}],
        "_editors": {
            "_lastEditedBy": "ChroMapper",
            "ChroMapper": {"version": "0.0.1"},
        },
    },
    "_difficultyBeatmapSets": [
        {
            "_beatmapCharacteristicName": "Standard",
            "_difficultyBeatmaps": [
                {
                    "_difficulty": "Hard",
                    "_difficultyRank": 5,
                    "_beatmapFilename": "Hard.dat",
                    "_noteJumpMovementSpeed": 16,
                    "_noteJumpStartBeatOffset": 0,
                    "_customData": {"_difficultyLabel": "Hard but fair"},
                },
                {
                    "_difficulty": "ExpertPlus",
                    "_difficultyRank": 9,
                    "_beatmapFilename": "ExpertPlus.dat",
                    "_noteJumpMovementSpeed": 18,
                    "_noteJumpStartBeatOffset": 0,
                },
            ],
        }
    ],
}

VALID_V2_DIFFICULTY: Dict[str, Any] = {
    "_version": "2.2.0",
    "_notes": [
        {"_time": 4, "_lineIndex": 1, "_lineLayer": 0, "_type": 0, "_cutDirection": 1},
        {"_time": 8, "_lineIndex": 2, "_lineLayer": 1, "_type": 1, "_cutDirection": 8},
        {"_time": 9, "_lineIndex": 0, "_lineLayer": 2, "_type": 3, "_cutDirection": 0},
    ],
    "_obstacles": [
        {"_time": 10, "_lineIndex": 0, "_type": 0, "_duration": 2, "_width": 1}
    ],
    "_events": [{"_time": 0, "_type": 1, "_value": 3}],
}

VALID_V3_DIFFICULTY: Dict[str, Any] = {
    "version": "3.2.0",
    "bpmEvents": [{"b": 0, "m": 120}],
    "rotationEvents": [{"b": 0, "e": 0, "r": 15}],
    "colorNotes": [
        {"b": 4, "x": 1, "y": 0, "c": 0, "d": 1, "a": 0},
        {"b": 12, "x": 2, "y": 0, "c": 1, "d": 8, "a": 0},
    ],
    "bombNotes": [{"b": 6, "x": 0, "y": 2}],
    "obstacles": [{"b": 10, "x": 0, "y": 0, "d": 2, "w": 1, "h": 5}],
    "sliders": [
        {
            "b": 16,
            "c": 0,
            "x": 1,
            "y": 0,
            "d": 1,
            "mu": 1,
            "tb": 18,
            "tx": 1,
            "ty": 2,
            "tc": 0,
            "tmu": 1,
            "m": 0,
        }
    ],
    "burstSliders": [
        {
            "b": 20,
            "c": 1,
            "x": 2,
            "y": 2,
            "d": 0,
            "tb": 20.5,
            "tx": 2,
            "ty": 0,
            "sc": 5,
            "s": 1,
        }
    ],
    "basicBeatmapEvents": [{"b": 0, "et": 1, "i": 3, "f": 1}],
    "colorBoostBeatmapEvents": [],
    "waypoints": [],
    "customData": {},
}


def to_bytes(obj: Any) -> bytes:
    return json.dumps(obj).encode("utf-8")


class InMemoryPackage:
    """Map package whose files live in a dict, names are matched in a
    case-insensitive way like the game does"""

    def __init__(self, files: Dict[str, bytes]) -> None:
        self.files = {name.lower(): contents for name, contents in files.items()}

    @property
    def names(self) -> Set[str]:
        return set(self.files)

    def get_file(self, name: str) -> Optional[BinaryIO]:
        contents = self.files.get(name.lower())
        if contents is None:
            return None
        return BytesIO(contents)

    def replace(self, name: str, contents: Any) -> "InMemoryPackage":
        files = dict(self.files)
        if not isinstance(contents, bytes):
            contents = to_bytes(contents)
        files[name.lower()] = contents
        return InMemoryPackage(files)

    def remove(self, name: str) -> "InMemoryPackage":
        return InMemoryPackage(
            {n: c for n, c in self.files.items() if n != name.lower()}
        )


def valid_info() -> Dict[str, Any]:
    return copy.deepcopy(VALID_INFO)


def valid_v2_difficulty() -> Dict[str, Any]:
    return copy.deepcopy(VALID_V2_DIFFICULTY)


def valid_v3_difficulty() -> Dict[str, Any]:
    return copy.deepcopy(VALID_V3_DIFFICULTY)


def valid_package(info: Optional[Dict[str, Any]] = None) -> InMemoryPackage:
    return InMemoryPackage(
        {
            "Info.dat": to_bytes(info if info is not None else VALID_INFO),
            "song.egg": b"OggS fake audio",
            "cover.jpg": b"\xff\xd8 fake image",
            "Hard.dat": to_bytes(VALID_V2_DIFFICULTY),
            "ExpertPlus.dat": to_bytes(VALID_V3_DIFFICULTY),
        }
    )


def fixed_audio_probe(duration: Optional[float]) -> AudioProbe:
    def probe(data: bytes) -> Optional[float]:
        return duration

    return probe


def fixed_image_probe(image: Optional[ImageInfo]) -> ImageProbe:
    def probe(data: bytes, info: ExtractedInfo) -> Optional[ImageInfo]:
        if image is not None:
            info.thumbnail = b"thumbnail"
        return image

    return probe


def check(
    package: InMemoryPackage,
    duration: Optional[float] = 180.0,
    image: Optional[ImageInfo] = SQUARE_JPEG,
) -> Tuple[ExtractedInfo, List[ConstraintViolation]]:
    return check_package(
        package.names,
        package.get_file,
        audio_probe=fixed_audio_probe(duration),
        image_probe=fixed_image_probe(image),
    )
