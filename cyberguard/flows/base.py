import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Mapping, Type, TypeVar, Union

from langchain_core.prompts import ChatPromptTemplate
from pydantic import BaseModel

from cyberguard.llm.generator import StructuredGenerator

logger = logging.getLogger(__name__)

RequestT = TypeVar("RequestT", bound=BaseModel)
ResultT = TypeVar("ResultT", bound=BaseModel)


class BaseFlow(ABC, Generic[RequestT, ResultT]):
    """Validate -> fill prompt -> structured LLM call.

    Subclasses name their template, output schema and validator. A flow
    keeps no state between calls; the generator is shared and read-only.
    """

    name: str = "flow"
    template: str
    output_schema: Type[ResultT]

    def __init__(self, generator: StructuredGenerator):
        self.generator = generator
        self.prompt = self._build_prompt()

    def _build_prompt(self) -> ChatPromptTemplate:
        return ChatPromptTemplate.from_template(self.template)

    @abstractmethod
    def validate(self, data: Union[RequestT, Mapping[str, Any]]) -> RequestT:
        pass

    @abstractmethod
    def _prompt_values(self, request: RequestT) -> Dict[str, Any]:
        pass

    async def run(self, data: Union[RequestT, Mapping[str, Any]]) -> ResultT:
        request = self.validate(data)
        logger.info("Starting %s flow", self.name)
        messages = self.prompt.format_messages(**self._prompt_values(request))
        result = await self.generator.invoke(messages, self.output_schema)
        logger.info("Completed %s flow", self.name)
        return result
