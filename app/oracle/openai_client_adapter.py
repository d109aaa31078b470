import httpx
import openai

from app.oracle.client_base import BaseOracleClient
from app.oracle.exceptions import OracleError, OracleNetworkError, OracleValidationError


class OpenAIClientAdapter(BaseOracleClient):
    """Sends oracle questions through any OpenAI-compatible chat endpoint.

    The SDK's own retries are disabled: a failed question degrades to an
    unknown answer and the document goes to manual review instead.
    """

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
        )

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
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": schema_name,
                        "strict": True,
                        "schema": json_schema,
                    },
                },
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise OracleNetworkError(f"Oracle provider unreachable: {exc}") from exc
        except openai.AuthenticationError as exc:
            raise OracleNetworkError(f"Oracle provider rejected credentials: {exc}") from exc
        except openai.RateLimitError as exc:
            raise OracleNetworkError(f"Oracle provider rate limit hit: {exc}") from exc
        except openai.APIError as exc:
            raise OracleNetworkError(f"Oracle provider API error: {exc}") from exc

        if not response.choices:
            raise OracleError(f"Oracle returned no choices for {schema_name}")
        choice = response.choices[0]
        if choice.message.refusal:
            raise OracleValidationError(f"Oracle refused {schema_name}: {choice.message.refusal}")
        if choice.finish_reason == "length":
            raise OracleValidationError(f"Oracle answer for {schema_name} was truncated")
        if choice.message.content is None:
            raise OracleError(f"Oracle returned an empty answer for {schema_name}")
        return choice.message.content
