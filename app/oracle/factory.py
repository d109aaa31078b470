from typing import ClassVar

from app.config.settings import Settings
from app.oracle.base import BaseOracle
from app.oracle.example_client_adapter import ExampleClientAdapter
from app.oracle.openai_client_adapter import OpenAIClientAdapter
from app.oracle.oracle import LlmOracle


class OracleFactory:
    """Creates the configured classification oracle."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseOracle:
        """Create a configured oracle from application settings."""
        provider = settings.oracle_provider.lower()
        if provider == "example":
            return LlmOracle(
                client=ExampleClientAdapter(),
                model="example",
                max_input_chars=settings.oracle_max_input_chars,
            )
        base_url = cls._resolve_base_url(provider, settings)
        model = settings.oracle_model_name.strip()
        if not model:
            raise ValueError(f"oracle_model_name is required for oracle_provider={provider}")
        client = OpenAIClientAdapter(
            api_key=settings.oracle_api_key,
            timeout_seconds=settings.oracle_timeout_seconds,
            base_url=base_url,
        )
        return LlmOracle(
            client=client,
            model=model,
            temperature=settings.oracle_temperature,
            max_input_chars=settings.oracle_max_input_chars,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        configured = settings.oracle_base_url.strip()
        if provider == "openai":
            return configured or None
        if provider == "openai_compatible":
            if not configured:
                raise ValueError(
                    "oracle_base_url is required for oracle_provider=openai_compatible"
                )
            return configured
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return configured or default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(f"Unknown oracle provider '{provider}'. Choose from: {supported}")
