from typing import Annotated, Any, Dict

from fastapi import APIRouter, Body, Depends

from .dependencies import (
    get_chat_flow,
    get_script_flow,
    get_summary_flow,
    get_vulnerability_flow,
)
from .schemas import ErrorResponse, ValidationErrorResponse
from cyberguard.core.constants import AppSettings
from cyberguard.core.schemas import ChatResult, ScriptResult, SummaryResult, VulnScanResult
from cyberguard.flows.article_summary import ArticleSummaryFlow
from cyberguard.flows.chat import ChatFlow
from cyberguard.flows.script_generation import ScriptGenerationFlow
from cyberguard.flows.vulnerabilities import VulnerabilityScanFlow


router = APIRouter(prefix=f"/api{AppSettings.API_VERSION}", tags=["CyberGuard AI"])

ERROR_RESPONSES: Dict[int | str, Dict[str, Any]] = {
    422: {
        "model": ValidationErrorResponse,
        "description": "Input failed validation; no model call was made",
    },
    502: {
        "model": ErrorResponse,
        "description": "The language model failed or returned non-conforming output",
    },
}

# Bodies are validated by the flows so every caller gets the same violations
RawBody = Annotated[Dict[str, Any], Body(...)]


@router.post("/vulnerabilities", response_model=VulnScanResult, responses=ERROR_RESPONSES)
async def identify_vulnerabilities(
    body: RawBody,
    flow: Annotated[VulnerabilityScanFlow, Depends(get_vulnerability_flow)],
) -> VulnScanResult:
    """
    Analyze a code snippet for potential security vulnerabilities.
    """
    return await flow.run(body)


@router.post("/scripts", response_model=ScriptResult, responses=ERROR_RESPONSES)
async def generate_security_script(
    body: RawBody,
    flow: Annotated[ScriptGenerationFlow, Depends(get_script_flow)],
) -> ScriptResult:
    """
    Generate a security automation script from a task description.
    """
    return await flow.run(body)


@router.post("/summaries", response_model=SummaryResult, responses=ERROR_RESPONSES)
async def summarize_security_article(
    body: RawBody,
    flow: Annotated[ArticleSummaryFlow, Depends(get_summary_flow)],
) -> SummaryResult:
    """
    Summarize the security article at the given URL.
    """
    return await flow.run(body)


@router.post("/chat", response_model=ChatResult, responses=ERROR_RESPONSES)
async def chat(
    body: RawBody,
    flow: Annotated[ChatFlow, Depends(get_chat_flow)],
) -> ChatResult:
    return await flow.run(body)
