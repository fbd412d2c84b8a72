from abc import ABC, abstractmethod


class BaseExtractionClient(ABC):
    """Contract for provider-specific vision model clients."""

    @abstractmethod
    def create_image_completion(
        self,
        *,
        model: str,
        system_prompt: str,
        user_prompt: str,
        image_data_url: str,
        json_schema: dict[str, object],
    ) -> str:
        """Return provider response as plain text."""
