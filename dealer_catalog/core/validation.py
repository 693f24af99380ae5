"""Input validation for caller-supplied query and load parameters.

Pydantic validation failures are translated into a single `ValidationError`
that names the offending field, so callers never see silently clamped values.
"""
from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


class ValidationError(ValueError):
    """Raised when caller input fails validation."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


def validate_model(model: type[ModelT], data: dict[str, Any]) -> ModelT:
    """Build `model` from `data`, raising ValidationError on the first bad field.

    Args:
        model: Pydantic model class to construct
        data: Raw keyword data (None values are dropped so defaults apply)

    Returns:
        The validated model instance

    Raises:
        ValidationError: If any field is invalid
    """
    cleaned = {key: value for key, value in data.items() if value is not None}
    try:
        return model.model_validate(cleaned)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or model.__name__
        raise ValidationError(field, first.get("msg", "invalid value")) from exc


def validate_page(offset: int, limit: int, *, max_limit: int) -> tuple[int, int]:
    """Validate pagination bounds.

    Raises:
        ValidationError: If offset is negative or limit is outside [1, max_limit]
    """
    if isinstance(offset, bool) or not isinstance(offset, int):
        raise ValidationError("offset", "must be an integer")
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise ValidationError("limit", "must be an integer")
    if offset < 0:
        raise ValidationError("offset", "must be greater than or equal to 0")
    if limit < 1 or limit > max_limit:
        raise ValidationError("limit", f"must be between 1 and {max_limit}")
    return offset, limit
