from __future__ import annotations

from typing import Any, Mapping, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from blog_crm.errors import ValidationError

S = TypeVar("S", bound=BaseModel)


def parse_fields(
    schema: type[S],
    fields: Mapping[str, Any],
    *,
    required: tuple[str, ...],
    required_message: str,
) -> S:
    """Validate ``fields`` against ``schema`` before anything reaches the store.

    A missing, blank or null value for any name in ``required`` is reported
    with ``required_message``; other problems name the offending field.
    """
    if not isinstance(fields, Mapping):
        raise ValidationError("Request body must be a JSON object")
    for name in required:
        if name in fields and fields[name] is None:
            raise ValidationError(required_message)
    try:
        return schema.model_validate(dict(fields))
    except SchemaError as e:
        errors = e.errors()
        if any(err["loc"] and err["loc"][0] in required for err in errors):
            raise ValidationError(required_message) from e
        err = errors[0]
        field = ".".join(str(part) for part in err["loc"]) or "input"
        raise ValidationError(f"{field}: {err['msg']}") from e
