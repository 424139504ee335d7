"""Explicit input validation at the service boundary.

Learn: FastAPI validates request bodies before a route runs, but the
services are also called directly (CLI, tests, other services). Each
service entry point runs its input through validate() first so bad
input never reaches domain logic, whoever the caller is.

Both paths report problems the same way: a list of {field, message}.
"""

from typing import Any, Iterable, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from authgate.errors import ValidationError

M = TypeVar("M", bound=BaseModel)

# Location roots FastAPI prepends to request errors.
_LOCATION_ROOTS = {"body", "query", "path", "header", "cookie"}


def field_errors(errors: Iterable[dict]) -> list[dict]:
    """Flatten pydantic error dicts into [{field, message}]."""
    out = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ())]
        if loc and loc[0] in _LOCATION_ROOTS:
            loc = loc[1:]
        out.append({"field": ".".join(loc), "message": err.get("msg", "Invalid value")})
    return out


def validate(model: type[M], data: dict[str, Any]) -> M:
    """Parse data into model, raising ValidationError with field details."""
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError("Validation failed", errors=field_errors(e.errors()))
