from typing import Optional

from ..core.constants import NL_SYSTEM_PROMPT
from ..core.exceptions import UpstreamServiceError
from ..core.logging import get_logger
from ..infrastructure.llm.openai_client import SERVICE_NAME, ChatCompletionClient


class TranslationService:
    """
    Turns an English question into a candidate SQL statement.

    The completion text is returned unmodified: nothing checks that it is
    valid SQL or that it is safe to run.
    """

    def __init__(self, client: Optional[ChatCompletionClient] = None, system_prompt: str = NL_SYSTEM_PROMPT):
        self.client = client or ChatCompletionClient()
        self.system_prompt = system_prompt
        self.logger = get_logger(self.__class__.__name__)

    async def translate(self, question: str) -> str:
        message = "Failed to generate SQL query"
        try:
            sql = await self.client.complete(self.system_prompt, question)
        except UpstreamServiceError as e:
            self.logger.error(f"{message}: {e.details}")
            raise UpstreamServiceError(SERVICE_NAME, message=message, details=e.details) from e

        if not sql:
            self.logger.error(f"{message}: empty completion")
            raise UpstreamServiceError(SERVICE_NAME, message=message, details=message)
        return sql
