"""Error response schemas."""

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel


class FieldViolation(BaseModel):
    """A single invalid request field."""

    field: str
    message: str


class ErrorResponse(BaseModel):
    """Body returned for every handled error."""

    detail: str
    errors: list[FieldViolation] | None = None


def field_violations(errors: Sequence[dict[str, Any]]) -> list[FieldViolation]:
    """Flatten pydantic error dicts into field-level violations.

    The leading ``body``/``path``/``query`` segment of each location is dropped,
    so ``("body", "title")`` becomes ``"title"``.
    """
    violations = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in ("body", "path", "query", "header"):
            loc = loc[1:]
        violations.append(
            FieldViolation(field=".".join(loc) or "body", message=error.get("msg", "Invalid value"))
        )
    return violations
