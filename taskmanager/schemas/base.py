import re

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from taskmanager.utils.errors import ValidationError


_ANGLE_BRACKETS = re.compile(r"[<>]")
_JS_SCHEME = re.compile(r"javascript:", re.IGNORECASE)
_EVENT_HANDLER = re.compile(r"on\w+=", re.IGNORECASE)


def sanitize_text(value):
    """Strip markup characters, javascript: schemes and inline on*= handlers, then trim."""
    if not isinstance(value, str):
        return value
    value = _ANGLE_BRACKETS.sub("", value)
    value = _JS_SCHEME.sub("", value)
    value = _EVENT_HANDLER.sub("", value)
    return value.strip()


class Schema(BaseModel):
    model_config = ConfigDict(extra="ignore")


def _field_name(loc):
    return ".".join(str(part) for part in loc) or "body"


def _message(error):
    # Our own validators raise ValueError; report their text without pydantic's prefix
    if error["type"] == "value_error":
        return str(error["ctx"]["error"])
    return error["msg"]


def field_errors(exc):
    return [
        {"field": _field_name(err["loc"]), "message": _message(err)}
        for err in exc.errors()
    ]


def load(schema, payload):
    """Validate ``payload`` against ``schema``, collecting every field error."""
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object", code="INVALID_JSON")
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(errors=field_errors(exc))
