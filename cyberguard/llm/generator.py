from __future__ import annotations

import logging
from typing import Any, Type, TypeVar

import httpx
from langchain_core.language_models import BaseChatModel, LanguageModelInput
from pydantic import BaseModel, ValidationError
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from cyberguard.core.errors import GenerationFailure

logger = logging.getLogger(__name__)

OutputT = TypeVar("OutputT", bound=BaseModel)

# Only transport-level errors are worth another attempt
TRANSIENT_ERRORS = (httpx.ConnectError, httpx.ReadTimeout, ConnectionError)


class StructuredGenerator:
    """
    Adapter between the flows and the chat model.

    Sends a filled prompt together with the JSON schema of the expected
    output and returns an instance of that schema. Anything else (provider
    down, malformed JSON, missing fields) raises ``GenerationFailure``.

    Retries are off by default (``max_retries=0``). When enabled they only
    cover transient transport errors and back off exponentially.
    """

    def __init__(
        self,
        llm: BaseChatModel,
        max_retries: int = 0,
        wait: wait_base | None = None,
    ):
        self.llm = llm
        self.max_retries = max(0, max_retries)
        self.wait = wait if wait is not None else wait_exponential(multiplier=1, min=2, max=10)

    async def invoke(self, prompt: LanguageModelInput, output_schema: Type[OutputT]) -> OutputT:
        try:
            structured_llm = self.llm.with_structured_output(output_schema)
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_retries + 1),
                wait=self.wait,
                retry=retry_if_exception_type(TRANSIENT_ERRORS),
                reraise=True,
            ):
                with attempt:
                    raw = await structured_llm.ainvoke(prompt)
        except Exception as e:
            logger.exception("Generation failed for schema %s", output_schema.__name__)
            raise GenerationFailure(
                f"Generation failed for {output_schema.__name__}: {e}", cause=e
            ) from e

        return self._conform(raw, output_schema)

    @staticmethod
    def _conform(raw: Any, output_schema: Type[OutputT]) -> OutputT:
        """Coerce the model output into ``output_schema`` without defaults."""
        if raw is None:
            raise GenerationFailure(
                f"Model returned no output for {output_schema.__name__}")
        if isinstance(raw, output_schema):
            return raw
        try:
            if isinstance(raw, BaseModel):
                raw = raw.model_dump()
            return output_schema.model_validate(raw)
        except ValidationError as e:
            raise GenerationFailure(
                f"Model output does not conform to {output_schema.__name__}", cause=e
            ) from e
