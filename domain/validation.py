import json
import logging

from pydantic import ValidationError

from domain.errors import (
    DEFAULT_MESSAGES,
    ErrorMessages,
    JsonSyntaxError,
    StructuralValidationError,
)
from domain.models import MealPlan


logger = logging.getLogger(__name__)


def field_path(loc: tuple[int | str, ...]) -> str:
    """('recipes', 0, 'time') -> 'recipes[0].time'"""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else part
    return path or "root"


def _reject_constant(name: str) -> float:
    raise ValueError(f"{name} is not valid JSON")


def validate(text: str, messages: ErrorMessages | None = None) -> MealPlan:
    messages = DEFAULT_MESSAGES if messages is None else messages

    try:
        data = json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        logger.error("Could not parse model output as JSON (%s). Text: %s", e, text)
        raise JsonSyntaxError(messages.invalid_json) from e

    try:
        return MealPlan.model_validate(data)
    except ValidationError as e:
        logger.error("Meal plan failed validation: %s", e.errors())
        first = e.errors()[0]
        path = field_path(first["loc"])
        raise StructuralValidationError(
            f"{messages.invalid_structure}: {path}. {messages.try_again}",
            field_path=path,
            detail=first["msg"],
        ) from e
