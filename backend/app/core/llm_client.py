# backend/app/core/llm_client.py
from typing import Optional
from openai import AsyncOpenAI
from openai import APIError, APITimeoutError, RateLimitError, AuthenticationError

from backend.app.core import settings
from backend.app.core.errors import GatewayError, GatewayTimeoutError, RateLimitedError


class LLMClient:
    """
    Wrapper around Groq (or any OpenAI-compatible provider).
    Forces STRICT JSON output using the official `response_format={"type": "json_object"}`.
    """

    def __init__(
        self,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
    ):
        self.model = model or settings.LLM_MODEL

        api_key = api_key or settings.LLM_API_KEY
        if not api_key:
            raise ValueError("LLM_API_KEY (or GROQ_API_KEY / OPENAI_API_KEY) environment variable is required.")

        self.async_client: AsyncOpenAI = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url or settings.LLM_BASE_URL,
        )

    async def chat(self, system_prompt: str, user_prompt: str, max_tokens: int = 2048) -> str:
        """
        Send a system + user message pair and return the raw JSON text.

        Provider failures are raised as gateway errors so the session can
        surface them; nothing is returned in-band.
        """

        try:
            response = await self.async_client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                response_format={"type": "json_object"},
                temperature=0.2,
                max_tokens=max_tokens,
            )

        except AuthenticationError as e:
            raise GatewayError("Invalid API key - check LLM_API_KEY.") from e

        except RateLimitError as e:
            raise RateLimitedError("Rate limit exceeded. Try again later.") from e

        except APITimeoutError as e:
            raise GatewayTimeoutError(f"LLM request timed out: {e}") from e

        except APIError as e:
            raise GatewayError(f"API error: {e}") from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise GatewayError("The AI model returned an empty response.")
        return content.strip()
