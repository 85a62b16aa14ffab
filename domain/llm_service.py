import logging
from typing import Self

from config import Config
from domain.agemini import GeminiClient
from domain.errors import DEFAULT_MESSAGES, ErrorMessages
from domain.models import MealPlan, RecipePromptParams
from domain.normalize import normalize
from domain.prompts import build_prompt
from domain.validation import validate


logger = logging.getLogger(__name__)


def parse_recipe_response(
    text: str,
    messages: ErrorMessages | None = None,
) -> MealPlan:
    """Turn raw model output, fetched or pasted by the user, into a meal plan."""
    return validate(normalize(text), messages)


class LLMService:
    @classmethod
    def from_config(
        cls,
        config: Config,
        *,
        messages: ErrorMessages | None = None,
    ) -> Self:
        messages = DEFAULT_MESSAGES if messages is None else messages
        gemini = GeminiClient(
            model=config.gemini_model,
            base_url=config.gemini_base_url,
            timeout=config.timeout,
            messages=messages,
        )
        return cls(gemini=gemini, messages=messages)

    def __init__(
        self,
        *,
        gemini: GeminiClient | None = None,
        messages: ErrorMessages | None = None,
    ) -> None:
        self.messages = DEFAULT_MESSAGES if messages is None else messages
        self.gemini = GeminiClient(messages=self.messages) if gemini is None else gemini

    def prompt(self, params: RecipePromptParams) -> str:
        return build_prompt(params)

    def parse(self, text: str) -> MealPlan:
        return parse_recipe_response(text, self.messages)

    async def generate_recipes(
        self,
        params: RecipePromptParams,
        *,
        api_key: str,
    ) -> MealPlan:
        prompt = self.prompt(params)
        logger.info(
            "Requesting %s meals for %s people from %s",
            params.meals,
            params.people,
            self.gemini.model,
        )
        text = await self.gemini.fetch_completion(api_key, prompt)
        plan = self.parse(text)
        logger.info("Got %s recipes", len(plan.recipes))
        return plan

    async def close(self) -> None:
        await self.gemini.close()
