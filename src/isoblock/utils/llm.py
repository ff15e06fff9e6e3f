import logging
from typing import Any, NoReturn

logger = logging.getLogger(__name__)


class LLMError(Exception):
    pass


class LLMRateLimitError(LLMError):
    pass


class LLMClient:
    def __init__(
        self,
        model: str = "gpt-4o",
        api_key: str | None = None,
        temperature: float = 0.0,
        max_tokens: int = 1024,
        timeout: float | None = None,
    ) -> None:
        self.model = model
        self.api_key = api_key
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout

    def _build_kwargs(
        self,
        messages: list[dict[str, str]],
        temperature: float | None,
        max_tokens: int | None,
    ) -> dict[str, Any]:
        temp = temperature if temperature is not None else self.temperature
        tokens = max_tokens if max_tokens is not None else self.max_tokens
        kwargs: dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": temp,
            "max_tokens": tokens,
        }
        if self.api_key:
            kwargs["api_key"] = self.api_key
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        return kwargs

    async def achat_completion(
        self,
        messages: list[dict[str, str]],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> dict[str, Any]:
        """Single async LLM call via litellm.acompletion. Failures are not retried."""
        if not self.validate_messages(messages):
            raise LLMError("Invalid messages: each must have 'role' and 'content' keys")
        try:
            import litellm

            kwargs = self._build_kwargs(messages, temperature, max_tokens)
            logger.info(f"LLM request to {self.model} with {len(messages)} messages")
            response = await litellm.acompletion(**kwargs)
            return self._parse_response(response)
        except LLMError:
            raise
        except Exception as e:
            self._raise_classified_error(e)

    def _parse_response(self, response: Any) -> dict[str, Any]:
        if not response.choices:
            raise LLMError("LLM response contained no choices")
        usage = getattr(response, "usage", None)
        result = {
            "content": response.choices[0].message.content,
            "model": response.model,
            "usage": {
                "prompt_tokens": getattr(usage, "prompt_tokens", 0),
                "completion_tokens": getattr(usage, "completion_tokens", 0),
                "total_tokens": getattr(usage, "total_tokens", 0),
            },
            "finish_reason": response.choices[0].finish_reason,
        }
        logger.info(
            f"LLM response: {result['usage']['total_tokens']} tokens, "
            f"finish_reason={result['finish_reason']}"
        )
        return result

    def _raise_classified_error(self, e: Exception) -> NoReturn:
        error_str = str(e).lower()

        if "rate" in error_str and "limit" in error_str:
            logger.warning(f"Rate limit exceeded: {e}")
            raise LLMRateLimitError(f"API rate limit exceeded: {e}") from e

        if "auth" in error_str or "api key" in error_str or "401" in error_str:
            raise LLMError(f"Authentication failed: {e}") from e

        logger.error(f"LLM API error: {e}")
        raise LLMError(f"LLM API call failed: {e}") from e

    def validate_messages(self, messages: list[dict[str, str]]) -> bool:
        if not isinstance(messages, list) or len(messages) == 0:
            return False

        for msg in messages:
            if not isinstance(msg, dict):
                return False
            if "role" not in msg or "content" not in msg:
                return False
            if msg["role"] not in ["system", "user", "assistant"]:
                return False

        return True
