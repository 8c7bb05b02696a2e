"""Constraint violations and the helpers used to collect them

Validation never stops at the first problem : every check adds a
ConstraintViolation to a Validator and the caller gets the whole list back.
Nested validators are merged into their parent with a path prefix, so a
violation on the beat of the 12th color note of a difficulty file ends up as

    `ExpertPlus.dat`.colorNotes[12].beat

Paths that start with a back-quoted file name are already fully qualified,
outer levels leave them untouched."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Pattern,
    Sequence,
    Tuple,
    TypeVar,
    Union,
)

from marshmallow import ValidationError, validate

T = TypeVar("T")

VERSION_PATTERN = re.compile(r"\d+\.\d+\.\d+\Z")


class Constraint(str, Enum):
    NOT_NULL = "NotNull"
    NOT_BLANK = "NotBlank"
    MATCHES = "Matches"
    BETWEEN = "Between"
    IN = "In"
    EQUALS = "Equals"
    ZERO = "Zero"
    POSITIVE_OR_ZERO = "PositiveOrZero"
    IN_FILES = "InFiles"
    AUDIO_FORMAT = "AudioFormat"
    IMAGE_FORMAT = "ImageFormat"
    IMAGE_SQUARE = "ImageSquare"
    IMAGE_SIZE = "ImageSize"
    CUT_DIRECTION = "CutDirection"
    MISPLACED_CUSTOM_DATA = "MisplacedCustomData"
    UNIQUE_DIFF = "UniqueDiff"
    METADATA_LENGTH = "MetadataLength"
    FILE_FORMAT = "FileFormat"


@dataclass(frozen=True)
class ConstraintViolation:
    property: str
    value: Any
    constraint: Constraint

    def key(self) -> Tuple[str, Constraint, str]:
        return self.property, self.constraint, repr(self.value)

    def is_file_qualified(self) -> bool:
        return self.property.startswith("`")

    def with_prefix(self, prefix: str) -> ConstraintViolation:
        if self.is_file_qualified():
            return self
        elif not self.property:
            return replace(self, property=prefix)
        elif self.property.startswith("["):
            return replace(self, property=prefix + self.property)
        else:
            return replace(self, property=f"{prefix}.{self.property}")

    def __str__(self) -> str:
        if self.value is None:
            return f"{self.property}: {self.constraint.value}"
        else:
            return f"{self.property}: {self.constraint.value} ({self.value!r})"


def file_prefix(filename: str) -> str:
    return f"`{filename}`"


class Validator:
    """Accumulates violations in the order they are found, without
    duplicates"""

    def __init__(self) -> None:
        self._violations: Dict[Tuple[str, Constraint, str], ConstraintViolation] = {}

    @property
    def violations(self) -> List[ConstraintViolation]:
        return list(self._violations.values())

    def add(self, violation: ConstraintViolation) -> None:
        self._violations.setdefault(violation.key(), violation)

    def merge(
        self, violations: Iterable[ConstraintViolation], prefix: Optional[str] = None
    ) -> None:
        for v in violations:
            self.add(v if prefix is None else v.with_prefix(prefix))

    def validate(self, name: str, value: Any) -> Property:
        return Property(self, name, value)


class Property:
    """A single named value under validation. Every check except not_null lets
    None through, absence is reported once by not_null"""

    def __init__(self, validator: Validator, name: str, value: Any) -> None:
        self.validator = validator
        self.name = name
        self.value = value

    def _fail(self, constraint: Constraint) -> None:
        self.validator.add(ConstraintViolation(self.name, self.value, constraint))

    def not_null(self) -> Property:
        if self.value is None:
            self._fail(Constraint.NOT_NULL)
        return self

    def check(
        self, constraint: Constraint, predicate: Callable[[Any], bool]
    ) -> Property:
        if self.value is not None and not predicate(self.value):
            self._fail(constraint)
        return self

    def _marshmallow(
        self, constraint: Constraint, validator: Callable[[Any], Any]
    ) -> Property:
        if self.value is None:
            return self
        try:
            validator(self.value)
        except ValidationError:
            self._fail(constraint)
        return self

    def not_blank(self) -> Property:
        return self.check(Constraint.NOT_BLANK, lambda s: bool(s.strip()))

    def matches(self, pattern: Union[str, Pattern[str]]) -> Property:
        return self._marshmallow(Constraint.MATCHES, validate.Regexp(pattern))

    def between(self, min: float, max: float) -> Property:
        return self._marshmallow(Constraint.BETWEEN, validate.Range(min=min, max=max))

    def positive_or_zero(self) -> Property:
        return self._marshmallow(Constraint.POSITIVE_OR_ZERO, validate.Range(min=0))

    def is_in(self, *choices: Any) -> Property:
        return self._marshmallow(Constraint.IN, validate.OneOf(choices))

    def is_equal_to(self, expected: Any) -> Property:
        return self._marshmallow(Constraint.EQUALS, validate.Equal(expected))

    def is_zero(self) -> Property:
        return self._marshmallow(Constraint.ZERO, validate.Equal(0))

    def in_files(self, files: Iterable[str]) -> Property:
        return self.check(Constraint.IN_FILES, lambda name: name.lower() in files)

    def nested(self, check: Callable[[Validator, Any], None]) -> Property:
        if self.value is not None:
            nested_validator = Validator()
            check(nested_validator, self.value)
            self.validator.merge(nested_validator.violations, prefix=self.name)
        return self

    def for_each(self, check_item: Callable[[Validator, T], None]) -> Property:
        items: Sequence[T] = self.value or []
        for index, item in enumerate(items):
            item_validator = Validator()
            check_item(item_validator, item)
            self.validator.merge(
                item_validator.violations, prefix=f"{self.name}[{index}]"
            )
        return self


ErrorMessages = Union[Mapping[Any, Any], Sequence[Any], str]


def violations_from_errors(
    messages: ErrorMessages, path: str = ""
) -> List[ConstraintViolation]:
    """Flatten the nested error messages of a marshmallow ValidationError into
    one FileFormat violation per offending location"""
    if isinstance(messages, Mapping):
        result = []
        for key, sub_messages in messages.items():
            result += violations_from_errors(sub_messages, _error_path(path, key))
        return result
    elif isinstance(messages, str):
        return [ConstraintViolation(path, messages, Constraint.FILE_FORMAT)]
    else:
        text = "; ".join(str(m) for m in messages)
        return [ConstraintViolation(path, text, Constraint.FILE_FORMAT)]


def _error_path(path: str, key: Any) -> str:
    if isinstance(key, int):
        return f"{path}[{key}]"
    elif key == "_schema":
        return path
    elif path:
        return f"{path}.{key}"
    else:
        return str(key)
