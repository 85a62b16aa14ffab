from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictStr,
    field_validator,
)
from pydantic.alias_generators import to_camel


def not_null(value: Any) -> Any:
    """Optional wire fields may be left out, but never sent as null."""
    if value is None:
        raise ValueError("may be omitted but must not be null")
    return value


class WireModel(BaseModel):
    """camelCase on the wire, snake_case in Python. Unknown keys pass through."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        frozen=True,
    )

    def to_dict(self) -> dict[str, Any]:
        # exclude_unset keeps an absent optional field absent rather than null
        return self.model_dump(by_alias=True, exclude_unset=True)


class Ingredient(WireModel):
    item: StrictStr
    amount: StrictStr
    unit: StrictStr | None = None

    @field_validator("unit", mode="before")
    @classmethod
    def unit_not_null(cls, value: Any) -> Any:
        return not_null(value)

    @property
    def key(self) -> str:
        return f"{self.item}|{self.amount}"


class Nutrition(WireModel):
    calories: StrictFloat
    carbs: StrictFloat
    fat: StrictFloat
    protein: StrictFloat


class Recipe(WireModel):
    id: StrictStr
    title: StrictStr
    time: StrictStr
    ingredients: list[Ingredient] = Field(min_length=1)
    instructions: list[StrictStr]
    used_ingredients: list[StrictStr]
    missing_ingredients: list[Ingredient] | None = None
    nutrition: Nutrition | None = None
    comments: StrictStr | None = None

    @field_validator("missing_ingredients", "nutrition", "comments", mode="before")
    @classmethod
    def optional_not_null(cls, value: Any) -> Any:
        return not_null(value)


class MealPlan(WireModel):
    recipes: list[Recipe]
    shopping_list: list[Ingredient]


class PantryItem(BaseModel):
    id: str
    name: str
    amount: str


class RecipePromptParams(BaseModel):
    ingredients: list[PantryItem]
    people: int
    meals: int
    diet: str
    language: str
    spices: list[str] = Field(default_factory=list)
    style_wishes: list[str] = Field(default_factory=list)

    @field_validator("style_wishes", mode="before")
    @classmethod
    def wish_list(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value] if value else []
        return value


def lists_match(a: list[Ingredient], b: list[Ingredient]) -> bool:
    """Whether two ingredient lists hold the same items, compared by key."""
    if len(a) != len(b):
        return False
    a_keys = {i.key for i in a}
    return all(i.key in a_keys for i in b)
