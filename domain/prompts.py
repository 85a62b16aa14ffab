from domain.models import PantryItem, RecipePromptParams
from domain.sanitize import sanitize


RECIPE_PROMPT = """
You are a smart recipe planner. {pantry}

{spices}

I need a meal plan for {meals} distinct meals for {people} people.

DIETARY PREFERENCE: {diet}
LANGUAGE: {language}
{style}
RULES:
1. STRICTLY follow the dietary preference: {diet}.
2. Output ALL text (recipe titles, ingredients, instructions, shopping list items, comments) in {language}.
3. Prioritize using as many of my pantry ingredients as possible.
4. The portion sizes must be realistic for {people} people.
5. Make the recipes varied: do not repeat the same main ingredient, cuisine or cooking method in every meal.
6. Balance flavors and textures in each recipe, e.g. pair something crunchy with something creamy and richness with acidity or freshness.
7. Where it suits the dish, suggest a fitting sauce, dressing or dip as part of the recipe.
8. If my pantry has too few ingredients for {meals} meals, choose suitable additional ingredients and list them in "missingIngredients".
9. The "ingredients" array must contain EVERY single ingredient needed for the recipe (both what I have and what I need to buy).
10. Compute "missingIngredients" separately for EACH recipe: it must ONLY contain the items that recipe needs and I do not have. Never combine the missing ingredients of several recipes into one recipe.
11. Ensure "missingIngredients" is a list of distinct objects, not one combined string.
12. The "shoppingList" aggregates the "missingIngredients" of ALL recipes: list each item once, with the total amount needed across all recipes.
13. The "item" field MUST NOT include the "amount". Keep them separate. Example: {{"item": "Carrots", "amount": "500g"}}, NOT {{"item": "Carrots 500g"}}.
14. Let the available spices guide the recipes. Not all spices need to be used. If you need to buy other spices, use the "missingIngredients" array.
15. Add an estimated "nutrition" per serving with numeric "calories", "carbs", "fat" and "protein".
16. NEVER put unescaped double quotes (") inside JSON string values. Use single quotes (') instead, e.g. "Known as 'paella' in Spain".
17. Optionally add a short tip or fun fact about the dish in "comments".
18. Return ONLY valid JSON. No markdown formatting, no code blocks, no citations.

JSON Structure:
{structure}
""".strip()


JSON_STRUCTURE = """
{
  "recipes": [
    {
      "id": "unique_id",
      "title": "Recipe Name",
      "time": "30 mins",
      "ingredients": [ {"item": "Name", "amount": "Quantity"} ],
      "instructions": ["Step 1", "Step 2"],
      "usedIngredients": ["pantry_item_id_1", "pantry_item_id_2"],
      "missingIngredients": [{"item": "Chicken", "amount": "500g"}],
      "nutrition": {"calories": 450, "carbs": 35, "fat": 18, "protein": 28},
      "comments": "Optional tip or fun fact about the dish"
    }
  ],
  "shoppingList": [
    {"item": "Chicken", "amount": "500g (Total for all recipes)"}
  ]
}
""".strip()


def _pantry_line(item: PantryItem) -> str:
    # ids are generated by the app, they are echoed back in usedIngredients
    return f"- {sanitize(item.name)} ({sanitize(item.amount)}) [ID: {item.id}]"


def _pantry_section(ingredients: list[PantryItem]) -> str:
    if not ingredients:
        return (
            "My pantry is empty. "
            "Choose suitable ingredients for the recipes yourself "
            'and put all of them in "missingIngredients" and the shopping list.'
        )
    lines = "\n".join(_pantry_line(i) for i in ingredients)
    return f"I have these ingredients in my pantry:\n{lines}"


def _clean_list(values: list[str]) -> list[str]:
    return [v for v in (sanitize(v) for v in values) if v]


def _spice_section(spices: list[str]) -> str:
    spices = _clean_list(spices)
    if not spices:
        return "No extra spices available."
    spice_list = ", ".join(spices)
    return (
        f"Available Spices/Staples (Do NOT add to shopping list): {spice_list}\n"
        'These must NOT appear in "missingIngredients" or the "shoppingList", '
        'but every one a recipe uses MUST be listed in that recipe\'s "ingredients" array.'
    )


def _style_section(style_wishes: list[str]) -> str:
    style_wishes = _clean_list(style_wishes)
    if not style_wishes:
        return ""
    wishes = ", ".join(style_wishes)
    return (
        f"STYLE/WISHES: {wishes}\n"
        "Please respect the style/wishes when choosing and writing the recipes.\n"
    )


def build_prompt(params: RecipePromptParams) -> str:
    """Render the full recipe generation prompt. Deterministic, no side effects."""
    return RECIPE_PROMPT.format(
        pantry=_pantry_section(params.ingredients),
        spices=_spice_section(params.spices),
        meals=params.meals,
        people=params.people,
        diet=sanitize(params.diet),
        language=sanitize(params.language),
        style=_style_section(params.style_wishes),
        structure=JSON_STRUCTURE,
    )
