import argparse
import asyncio
import json
import logging
from pathlib import Path
import sys

from rich import print
from rich.logging import RichHandler
from rich.markup import escape

import config
from domain.errors import RecipeServiceError
from domain.llm_service import LLMService, parse_recipe_response
from domain.models import MealPlan, PantryItem, RecipePromptParams
from domain.prompts import build_prompt


CONFIG = config.Config()


def read_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def prompt_params(args: argparse.Namespace) -> RecipePromptParams:
    pantry = json.loads(read_text(args.pantry)) if args.pantry else []
    return RecipePromptParams(
        ingredients=[PantryItem.model_validate(p) for p in pantry],
        people=CONFIG.people if args.people is None else args.people,
        meals=CONFIG.meals if args.meals is None else args.meals,
        diet=CONFIG.diet if args.diet is None else args.diet,
        language=CONFIG.language if args.language is None else args.language,
        spices=args.spice,
        style_wishes=args.wish,
    )


def show(plan: MealPlan, *, as_json: bool) -> None:
    if as_json:
        text = json.dumps(plan.to_dict(), indent=2, ensure_ascii=False)
        sys.stdout.write(text + "\n")
        return
    for recipe in plan.recipes:
        print(f"[bold]{escape(recipe.title)}[/bold] ({escape(recipe.time)})")
        for ingredient in recipe.ingredients:
            print(f"  - {escape(ingredient.item)} ({escape(ingredient.amount)})")
        for n, step in enumerate(recipe.instructions, start=1):
            print(f"  {n}. {escape(step)}")
        if recipe.comments:
            print(f"  [italic]{escape(recipe.comments)}[/italic]")
        print()
    print("[bold]Shopping list[/bold]")
    for item in plan.shopping_list:
        print(f"  - {escape(item.item)} ({escape(item.amount)})")


async def generate(args: argparse.Namespace) -> MealPlan:
    llm = LLMService.from_config(CONFIG)
    try:
        return await llm.generate_recipes(
            prompt_params(args), api_key=CONFIG.gemini_api_key
        )
    finally:
        await llm.close()


def parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Turn a pantry into a meal plan.")
    sub = p.add_subparsers(dest="command", required=True)

    for name in ("prompt", "generate"):
        cmd = sub.add_parser(name)
        cmd.add_argument("pantry", nargs="?", help="JSON list of pantry items")
        cmd.add_argument("--people", type=int)
        cmd.add_argument("--meals", type=int)
        cmd.add_argument("--diet")
        cmd.add_argument("--language")
        cmd.add_argument("--spice", action="append", default=[])
        cmd.add_argument("--wish", action="append", default=[])
        cmd.add_argument("--json", action="store_true")

    paste = sub.add_parser("paste", help="Parse a response pasted from a chat")
    paste.add_argument("response", help="file with the model's answer, - for stdin")
    paste.add_argument("--json", action="store_true")
    return p


def main() -> int:
    logging.basicConfig(level=logging.INFO, handlers=[RichHandler()])
    args = parser().parse_args()

    if args.command == "prompt":
        sys.stdout.write(build_prompt(prompt_params(args)) + "\n")
        return 0

    try:
        if args.command == "generate":
            plan = asyncio.run(generate(args))
        else:
            plan = parse_recipe_response(read_text(args.response))
    except RecipeServiceError as e:
        print(f"[red]{escape(e.message)}[/red]")
        return 1

    show(plan, as_json=args.json)
    return 0


if __name__ == "__main__":
    sys.exit(main())
