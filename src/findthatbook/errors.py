# ABOUTME: Exception hierarchy for FindThatBook, each carrying a stable machine-readable code.
# ABOUTME: Raised by request validation, intent extraction, catalog search, and registry setup.


class FindThatBookError(Exception):
    """Base class for all FindThatBook errors."""

    error_code = "FINDTHATBOOK_ERROR"

    def __init__(self, message: str, error_code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if error_code is not None:
            self.error_code = error_code


class ValidationError(FindThatBookError):
    """Raised when a search request fails input validation."""

    error_code = "VALIDATION_FAILED"

    def __init__(self, message: str, property_name: str) -> None:
        super().__init__(message)
        self.property_name = property_name

    @classmethod
    def null_or_empty(cls, property_name: str) -> "ValidationError":
        return cls(f"{property_name} cannot be null or empty", property_name)

    @classmethod
    def out_of_range(
        cls, property_name: str, minimum: int, maximum: int, actual: int
    ) -> "ValidationError":
        return cls(
            f"{property_name} must be between {minimum} and {maximum}, but was {actual}",
            property_name,
        )


class IntentExtractionError(FindThatBookError):
    """Raised when the generative-text API cannot produce a search intent."""

    error_code = "AI_EXTRACTION_FAILED"

    @classmethod
    def api_call_failed(cls, service_name: str) -> "IntentExtractionError":
        return cls(f"Failed to call {service_name} API for book extraction")

    @classmethod
    def invalid_response(cls, reason: str) -> "IntentExtractionError":
        return cls(f"Invalid AI response: {reason}")

    @classmethod
    def parsing_failed(cls, content: str) -> "IntentExtractionError":
        return cls(f"Failed to parse AI response: {content}")


class CatalogSearchError(FindThatBookError):
    """Raised when the catalog search API fails."""

    error_code = "BOOK_SEARCH_FAILED"

    @classmethod
    def api_call_failed(cls, service_name: str) -> "CatalogSearchError":
        return cls(f"Failed to call {service_name} API for book search")

    @classmethod
    def invalid_response(cls, reason: str) -> "CatalogSearchError":
        return cls(f"Invalid search response: {reason}")

    @classmethod
    def service_unavailable(cls, service_name: str) -> "CatalogSearchError":
        return cls(f"{service_name} service is currently unavailable")


class MatchingConfigurationError(FindThatBookError):
    """Raised at startup when the strategy set is misconfigured."""

    error_code = "MATCHING_MISCONFIGURED"
