from dataclasses import field
from typing import Any, Dict

import simplejson as json
from marshmallow import EXCLUDE, Schema, post_dump, pre_load

ADDITIONAL_INFORMATION = "additional_information"


def key(data_key: str) -> Any:
    """Optional dataclass field read from the given JSON key"""
    return field(default=None, metadata={"data_key": data_key})


def extra_fields() -> Any:
    return field(default_factory=dict)


class BaseSchema(Schema):
    """Unknown keys are dropped, except for dataclasses that declare an
    `additional_information` field : those keep every key the schema does not
    know about in it, verbatim"""

    class Meta:
        unknown = EXCLUDE

    @pre_load
    def _collect_additional_information(self, data: Any, **kwargs: Any) -> Any:
        if ADDITIONAL_INFORMATION not in self.load_fields or not isinstance(
            data, dict
        ):
            return data

        known = {
            schema_field.data_key or name
            for name, schema_field in self.load_fields.items()
            if name != ADDITIONAL_INFORMATION
        }
        result = {key: value for key, value in data.items() if key in known}
        result[ADDITIONAL_INFORMATION] = {
            key: value for key, value in data.items() if key not in known
        }
        return result

    @post_dump
    def _inline_additional_information(self, data: dict, **kwargs: Any) -> dict:
        extra = data.pop(ADDITIONAL_INFORMATION, None) or {}
        return {
            **{key: value for key, value in data.items() if value is not None},
            **extra,
        }


def load_json_object(data: bytes) -> Dict[str, Any]:
    """Decodes a JSON document that must be an object at the top level.
    Raises ValueError otherwise (UnicodeDecodeError and JSONDecodeError are
    ValueErrors too, documents nested too deeply to be decoded are reported
    the same way)"""
    text = data.decode("utf-8-sig")
    try:
        obj = json.loads(text)
    except RecursionError:
        raise ValueError("Document is nested too deeply") from None
    if not isinstance(obj, dict):
        raise ValueError("Top level value is not an object")
    return obj
