import logging
from enum import Enum
from typing import Any, Dict, Optional, TypedDict

from langgraph.graph import END, StateGraph

from cyberguard.core.prompts import ARTICLE_SUMMARY_PROMPT
from cyberguard.core.schemas import (
    ArticleSummary,
    SummaryRequest,
    SummaryResult,
    validate_summary_request,
)
from cyberguard.flows.base import BaseFlow
from cyberguard.llm.generator import StructuredGenerator
from cyberguard.services.article_extractor import ArticleExtractor

logger = logging.getLogger(__name__)

NOTHING_TO_SUMMARIZE = "No readable article content was found at this URL, so there is nothing to summarize."


class Node(str, Enum):
    """Nodes of the summarization graph."""
    EXTRACT = "extract"
    SUMMARIZE = "summarize"
    NOTHING_TO_SUMMARIZE = "nothing_to_summarize"


class SummaryState(TypedDict):
    """State for the summarization graph."""
    url: str
    article: str
    result: Optional[SummaryResult]


class ArticleSummaryFlow(BaseFlow[SummaryRequest, SummaryResult]):
    """Extract an article, then summarize it.

    Extraction never fails loudly: an unreachable or unreadable page gives
    empty content. What happens next is an explicit branch of the graph.
    By default the empty article is still sent to the model (the result is
    marked ``article_extracted=False``); with ``skip_empty_articles`` the
    flow stops and returns a "nothing to summarize" result instead.
    """

    name = "article_summary"
    template = ARTICLE_SUMMARY_PROMPT
    output_schema = ArticleSummary

    def __init__(
        self,
        generator: StructuredGenerator,
        extractor: ArticleExtractor,
        skip_empty_articles: bool = False,
    ):
        super().__init__(generator)
        self.extractor = extractor
        self.skip_empty_articles = skip_empty_articles
        self.graph = self._build_graph()

    def validate(self, data):
        return validate_summary_request(data)

    def _prompt_values(self, state: SummaryState):
        return {"article": state["article"]}

    async def _extract_node(self, state: SummaryState) -> Dict[str, Any]:
        article = await self.extractor.extract(state["url"])
        return {"article": article}

    def _route_after_extract(self, state: SummaryState) -> str:
        if state["article"].strip():
            return Node.SUMMARIZE.value
        if self.skip_empty_articles:
            logger.info("No content extracted from %s, skipping summary", state["url"])
            return Node.NOTHING_TO_SUMMARIZE.value
        logger.warning(
            "No content extracted from %s; summarizing an empty article", state["url"])
        return Node.SUMMARIZE.value

    async def _summarize_node(self, state: SummaryState) -> Dict[str, Any]:
        messages = self.prompt.format_messages(**self._prompt_values(state))
        output = await self.generator.invoke(messages, self.output_schema)
        return {
            "result": SummaryResult(
                summary=output.summary,
                article_extracted=bool(state["article"].strip()),
            )
        }

    def _nothing_to_summarize_node(self, state: SummaryState) -> Dict[str, Any]:
        return {"result": SummaryResult(summary=NOTHING_TO_SUMMARIZE, article_extracted=False)}

    def _build_graph(self):
        graph = StateGraph(SummaryState)

        graph.add_node(Node.EXTRACT.value, self._extract_node)
        graph.add_node(Node.SUMMARIZE.value, self._summarize_node)
        graph.add_node(Node.NOTHING_TO_SUMMARIZE.value, self._nothing_to_summarize_node)

        graph.add_conditional_edges(
            Node.EXTRACT.value,
            self._route_after_extract,
            {
                Node.SUMMARIZE.value: Node.SUMMARIZE.value,
                Node.NOTHING_TO_SUMMARIZE.value: Node.NOTHING_TO_SUMMARIZE.value,
            },
        )
        graph.add_edge(Node.SUMMARIZE.value, END)
        graph.add_edge(Node.NOTHING_TO_SUMMARIZE.value, END)

        graph.set_entry_point(Node.EXTRACT.value)
        return graph.compile()

    async def run(self, data) -> SummaryResult:
        request = self.validate(data)
        initial_state: SummaryState = {
            "url": str(request.url),
            "article": "",
            "result": None,
        }
        logger.info("Starting %s flow for %s", self.name, initial_state["url"])
        result_state = await self.graph.ainvoke(initial_state)
        logger.info("Completed %s flow for %s", self.name, initial_state["url"])
        return result_state["result"]


async def summarize_security_article(
    request,
    generator: StructuredGenerator,
    extractor: ArticleExtractor,
    skip_empty_articles: bool = False,
) -> SummaryResult:
    """Summarize the security article found at ``request.url``."""
    flow = ArticleSummaryFlow(generator, extractor, skip_empty_articles=skip_empty_articles)
    return await flow.run(request)
