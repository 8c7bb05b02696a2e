from enum import Enum
from typing import Optional, Type, TypeVar

E = TypeVar("E", bound=Enum)


class Characteristic(str, Enum):
    STANDARD = "Standard"
    NO_ARROWS = "NoArrows"
    ONE_SABER = "OneSaber"
    DEGREE_360 = "360Degree"
    DEGREE_90 = "90Degree"
    LIGHTSHOW = "Lightshow"
    LAWLESS = "Lawless"


class Difficulty(str, Enum):
    EASY = "Easy"
    NORMAL = "Normal"
    HARD = "Hard"
    EXPERT = "Expert"
    EXPERT_PLUS = "ExpertPlus"

    @property
    def rank(self) -> int:
        return DIFFICULTY_RANKS[self]

    @classmethod
    def from_rank(cls, rank: int) -> Optional["Difficulty"]:
        return next((d for d, r in DIFFICULTY_RANKS.items() if r == rank), None)


DIFFICULTY_RANKS = {
    Difficulty.EASY: 1,
    Difficulty.NORMAL: 3,
    Difficulty.HARD: 5,
    Difficulty.EXPERT: 7,
    Difficulty.EXPERT_PLUS: 9,
}


def search_enum(enum: Type[E], name: Optional[str]) -> Optional[E]:
    """Case-insensitive lookup by value"""
    if name is None:
        return None

    folded = name.lower()
    return next((e for e in enum if e.value.lower() == folded), None)
