import logging
from typing import List, Optional

from openai import AsyncOpenAI, OpenAIError

from ...core.config import LLMSettings, get_settings
from ...core.exceptions import UpstreamServiceError

logger = logging.getLogger(__name__)

SERVICE_NAME = "openai"


class ChatCompletionClient:
    """Thin wrapper over the OpenAI chat-completions endpoint."""

    def __init__(self, settings: Optional[LLMSettings] = None, client: Optional[AsyncOpenAI] = None):
        self.settings = settings or get_settings().llm
        self._client = client

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            if not self.settings.api_key:
                raise UpstreamServiceError(
                    SERVICE_NAME,
                    message="Language model is not configured",
                    details="OPENAI_API_KEY is not set",
                )
            self._client = AsyncOpenAI(api_key=self.settings.api_key)
        return self._client

    async def complete(self, system_prompt: str, user_message: str) -> Optional[str]:
        """Return the text of the first choice, or None when there is none."""
        client = self._get_client()
        messages: List[dict] = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_message},
        ]
        try:
            completion = await client.chat.completions.create(
                model=self.settings.model,
                messages=messages,
                temperature=self.settings.temperature,
                max_tokens=self.settings.max_tokens,
            )
        except OpenAIError as e:
            logger.error(f"Chat completion request failed: {e}")
            raise UpstreamServiceError(SERVICE_NAME, details=str(e)) from e

        if not completion.choices:
            return None
        return completion.choices[0].message.content
