from typing import Any, Dict

import pytest
from hypothesis import given
from hypothesis import strategies as st
from marshmallow import ValidationError

from beatmapcheck.difficulty import (
    Version,
    load_difficulty,
    load_raw_difficulty,
    recognize_difficulty_version,
)
from beatmapcheck.difficulty.v2 import schema as v2
from beatmapcheck.difficulty.v3 import schema as v3
from beatmapcheck.testutils.packages import (
    to_bytes,
    valid_v2_difficulty,
    valid_v3_difficulty,
)

json_values = st.recursive(
    st.none() | st.booleans() | st.integers() | st.text(max_size=5),
    lambda children: st.lists(children, max_size=3)
    | st.dictionaries(st.text(max_size=5), children, max_size=3),
    max_leaves=10,
)


@given(st.dictionaries(st.text(max_size=10), json_values, max_size=5))
def test_that_every_object_has_a_version(obj: Dict[str, Any]) -> None:
    expected = Version.CURRENT if "version" in obj else Version.LEGACY
    assert recognize_difficulty_version(obj) == expected


@pytest.mark.parametrize("obj", [[], "version", 3, None])
def test_that_non_objects_are_rejected(obj: Any) -> None:
    with pytest.raises(ValueError):
        recognize_difficulty_version(obj)


def test_that_the_version_key_selects_the_current_layout() -> None:
    body = load_difficulty(to_bytes(valid_v3_difficulty()))
    assert isinstance(body, v3.Difficulty)
    assert body.version == "3.2.0"
    assert body.color_notes is not None and len(body.color_notes) == 2
    assert body.basic_events == [
        v3.BasicEvent(beat=0, event_type=1, value=3, float_value=1)
    ]


def test_that_objects_without_a_version_key_use_the_legacy_layout() -> None:
    body = load_difficulty(to_bytes(valid_v2_difficulty()))
    assert isinstance(body, v2.Difficulty)
    assert body.version == "2.2.0"
    assert body.obstacles == [
        v2.Obstacle(time=10, line_index=0, type=0, duration=2, width=1)
    ]


def test_that_an_empty_object_is_a_legacy_difficulty_with_nothing_in_it() -> None:
    assert load_raw_difficulty({}) == v2.Difficulty()


def test_that_unknown_keys_are_ignored() -> None:
    raw = valid_v3_difficulty()
    raw["lightColorEventBoxGroups"] = [{"b": 2}]
    raw["colorNotes"][0]["customData"] = {"color": [1, 0, 0]}
    body = load_raw_difficulty(raw)
    assert isinstance(body, v3.Difficulty)


def test_that_badly_typed_values_fail_the_load() -> None:
    raw = valid_v2_difficulty()
    raw["_notes"][1]["_time"] = "later"
    with pytest.raises(ValidationError) as excinfo:
        load_raw_difficulty(raw)
    assert excinfo.value.messages == {"_notes": {1: {"_time": ["Not a valid number."]}}}


@pytest.mark.parametrize("data", [b"", b"{", b"\xff\xfe\x00", b"[1, 2]", b"null"])
def test_that_malformed_files_raise_value_error(data: bytes) -> None:
    with pytest.raises(ValueError):
        load_difficulty(data)


@pytest.mark.parametrize("depth", [5000, 100000])
def test_that_deeply_nested_files_raise_value_error(depth: int) -> None:
    data = b'{"_notes": ' + b"[" * depth + b"]" * depth + b"}"
    with pytest.raises(ValueError, match="nested too deeply"):
        load_difficulty(data)
