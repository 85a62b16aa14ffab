from pydantic import BaseModel


class ErrorMessages(BaseModel):
    """User facing error text. Pass a translated instance to localize."""

    invalid_structure: str = "Invalid recipe data structure"
    try_again: str = "Please try again."
    invalid_json: str = "Failed to parse recipe data. Please try again."
    api_key_required: str = "API Key is required"
    fetch_failed: str = "Failed to fetch recipes"
    empty_response: str = "No recipes generated"
    timeout: str = "Request timed out. Please try again."
    network_error: str = "Network error. Please check your connection."
    unexpected_error: str = "An unexpected error occurred."


DEFAULT_MESSAGES = ErrorMessages()


class RecipeServiceError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ApiKeyRequiredError(RecipeServiceError):
    pass


class NetworkError(RecipeServiceError):
    pass


class RequestTimeoutError(RecipeServiceError):
    pass


class HttpError(RecipeServiceError):
    def __init__(self, message: str, *, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class EmptyResponseError(RecipeServiceError):
    pass


class JsonSyntaxError(RecipeServiceError):
    pass


class StructuralValidationError(RecipeServiceError):
    def __init__(self, message: str, *, field_path: str, detail: str) -> None:
        super().__init__(message)
        self.field_path = field_path
        self.detail = detail
