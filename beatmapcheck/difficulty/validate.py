from functools import singledispatch
from typing import List

from beatmapcheck.context import ExtractedInfo
from beatmapcheck.violations import ConstraintViolation

from .load import DifficultyBody
from .v2 import schema as v2
from .v2.validate import validate_v2
from .v3 import schema as v3
from .v3.validate import validate_v3


@singledispatch
def validate_difficulty(
    body: DifficultyBody, info: ExtractedInfo
) -> List[ConstraintViolation]:
    raise ValueError(f"Unknown difficulty type : {type(body)}")


@validate_difficulty.register
def _validate_legacy(
    body: v2.Difficulty, info: ExtractedInfo
) -> List[ConstraintViolation]:
    return validate_v2(body, info)


@validate_difficulty.register
def _validate_current(
    body: v3.Difficulty, info: ExtractedInfo
) -> List[ConstraintViolation]:
    return validate_v3(body, info)
