"""Turns a pantry into a meal plan with the help of a language model.

The hard part is the contract with the model, not the call itself.

- Pantry text is typed by users and ends up inside the prompt, so it is
  flattened to single, control character free lines first.
- Model output is free text. It gets fenced in markdown, followed by
  citations, sprinkled with footnote links and quotes that are not escaped.
  It is repaired textually and then validated against the `MealPlan` shape.
- Every failure surfaces as one `RecipeServiceError` with a short message
  the UI can show. Details go to the log.
"""
