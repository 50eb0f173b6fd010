from marshmallow import ValidationError as SchemaValidationError
from marshmallow import validate

from app.exceptions import ValidationError


def not_blank(message: str):
    return validate.Regexp(r"\s*\S", error=message)


def _first_message(messages, path=""):
    if isinstance(messages, dict):
        key = sorted(messages, key=str)[0]
        child_path = path if key == "_schema" else ".".join(p for p in (path, str(key)) if p)
        return _first_message(messages[key], child_path)

    if isinstance(messages, (list, tuple)):
        return _first_message(messages[0], path) if messages else path

    text = str(messages)
    # marshmallow's built-in messages are sentences that do not name the field
    if text.endswith(".") and path:
        return f"{path}: {text}"
    return text


def load_payload(schema, data, partial=False):
    """Validate ``data`` against ``schema``, raising the app's ValidationError."""
    if not isinstance(data, dict):
        raise ValidationError("Invalid JSON body")

    try:
        return schema.load(data, partial=partial)
    except SchemaValidationError as e:
        raise ValidationError(_first_message(e.messages)) from e
