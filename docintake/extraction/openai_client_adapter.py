import httpx
import openai

from docintake.extraction.client_base import BaseExtractionClient, CompletionRequest
from docintake.extraction.exceptions import ExtractionError, ExtractionNetworkError

# Provider rejections that a retry with the same request will not fix.
_REJECTED = (openai.AuthenticationError, openai.PermissionDeniedError, openai.BadRequestError)


class OpenAIClientAdapter(BaseExtractionClient):
    """Client for any OpenAI-compatible chat completions endpoint.

    Retries are left to the Extractor, so the SDK's own retry loop is disabled.
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

    def complete(self, request: CompletionRequest) -> str:
        try:
            response = self._client.chat.completions.create(
                model=request.model,
                temperature=request.temperature,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": request.schema_name,
                        "strict": True,
                        "schema": request.json_schema,
                    },
                },
                messages=[
                    {"role": "system", "content": request.system_prompt},
                    {"role": "user", "content": request.user_prompt},
                ],
            )
        except _REJECTED as exc:
            raise ExtractionError(f"AI provider rejected the request: {exc}") from exc
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ExtractionNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise ExtractionNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise ExtractionError("AI returned no choices")
        choice = response.choices[0]
        if getattr(choice.message, "refusal", None):
            raise ExtractionError(f"AI refused to extract: {choice.message.refusal}")
        if choice.finish_reason == "length":
            raise ExtractionError("AI response was truncated (finish_reason=length)")
        if choice.message.content is None:
            raise ExtractionError("AI returned empty response")
        return choice.message.content
