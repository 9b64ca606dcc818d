from fastapi import Depends, Request
from langchain_ollama import ChatOllama

from cyberguard.core.config import get_settings, Settings
from cyberguard.flows.article_summary import ArticleSummaryFlow
from cyberguard.flows.chat import ChatFlow
from cyberguard.flows.script_generation import ScriptGenerationFlow
from cyberguard.flows.vulnerabilities import VulnerabilityScanFlow
from cyberguard.llm.generator import StructuredGenerator
from cyberguard.services.article_extractor import ArticleExtractor


def get_settings_dependency() -> Settings:
    return get_settings()


def build_ollama(settings: Settings) -> ChatOllama:
    return ChatOllama(**settings.ollama_config)


def build_generator(settings: Settings) -> StructuredGenerator:
    return StructuredGenerator(build_ollama(settings), max_retries=settings.LLM_MAX_RETRIES)


def build_extractor(settings: Settings) -> ArticleExtractor:
    return ArticleExtractor(
        timeout=settings.EXTRACTOR_TIMEOUT,
        user_agent=settings.EXTRACTOR_USER_AGENT,
    )


def get_generator(request: Request) -> StructuredGenerator:
    """Process-wide generator created in the app lifespan"""
    return request.app.state.generator


def get_extractor(request: Request) -> ArticleExtractor:
    return request.app.state.extractor


def get_script_flow(
    generator: StructuredGenerator = Depends(get_generator),
) -> ScriptGenerationFlow:
    return ScriptGenerationFlow(generator)


def get_vulnerability_flow(
    generator: StructuredGenerator = Depends(get_generator),
) -> VulnerabilityScanFlow:
    return VulnerabilityScanFlow(generator)


def get_summary_flow(
    generator: StructuredGenerator = Depends(get_generator),
    extractor: ArticleExtractor = Depends(get_extractor),
    settings: Settings = Depends(get_settings_dependency),
) -> ArticleSummaryFlow:
    return ArticleSummaryFlow(
        generator,
        extractor,
        skip_empty_articles=settings.SKIP_EMPTY_ARTICLES,
    )


def get_chat_flow(
    generator: StructuredGenerator = Depends(get_generator),
) -> ChatFlow:
    return ChatFlow(generator)
