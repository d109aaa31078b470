from abc import ABC, abstractmethod


class BaseOracleClient(ABC):
    """Contract for provider-specific oracle AI clients."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        schema_name: str,
        json_schema: dict[str, object],
    ) -> str:
        """Return provider response as plain text."""
