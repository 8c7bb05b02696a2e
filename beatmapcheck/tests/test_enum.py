import pytest

from beatmapcheck.enum import Characteristic, Difficulty, search_enum
from beatmapcheck.info.schema import DifficultyBeatmap, DifficultyBeatmapSet


@pytest.mark.parametrize("name", ["ExpertPlus", "expertplus", "EXPERTPLUS"])
def test_that_search_enum_ignores_case(name: str) -> None:
    assert search_enum(Difficulty, name) == Difficulty.EXPERT_PLUS


def test_that_search_enum_finds_nothing_for_unknown_names() -> None:
    assert search_enum(Characteristic, "TwoSabers") is None
    assert search_enum(Characteristic, None) is None


def test_ranks() -> None:
    assert [d.rank for d in Difficulty] == [1, 3, 5, 7, 9]
    assert Difficulty.from_rank(7) == Difficulty.EXPERT
    assert Difficulty.from_rank(4) is None


def test_that_the_rank_wins_over_the_name() -> None:
    beatmap = DifficultyBeatmap(difficulty="Easy", difficulty_rank=9)
    assert beatmap.enum_value() == Difficulty.EXPERT_PLUS


def test_that_the_name_is_used_when_the_rank_is_unusable() -> None:
    assert DifficultyBeatmap(difficulty="hard").enum_value() == Difficulty.HARD
    beatmap = DifficultyBeatmap(difficulty="Normal", difficulty_rank=2)
    assert beatmap.enum_value() == Difficulty.NORMAL


def test_characteristic_lookup() -> None:
    beatmap_set = DifficultyBeatmapSet(characteristic_name="360degree")
    assert beatmap_set.enum_value() == Characteristic.DEGREE_360
