"""Request and result models for every flow, plus their validators.

Wire names keep the camelCase used by the browser front-end
(``codeSnippet``, ``articleExtracted``); Python code uses the snake_case
attributes. Each ``validate_*`` function turns a raw mapping into the
request model or raises ``InputValidationError`` listing every failed
constraint.
"""
from typing import Annotated, Any, Dict, List, Mapping, Type, TypeVar, Union

from pydantic import (
    AnyHttpUrl,
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    ValidationError,
)

from .constants import AppSettings, Sender
from .errors import FieldViolation, InputValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


class ScriptRequest(BaseModel):
    description: str = Field(
        ...,
        min_length=AppSettings.SCRIPT_DESCRIPTION_MIN_LENGTH,
        max_length=AppSettings.SCRIPT_DESCRIPTION_MAX_LENGTH,
        description="A description of the security task for which a script should be generated.",
    )


class ScriptResult(BaseModel):
    script: str = Field(
        ...,
        min_length=1,
        description="The generated security script based on the provided description.",
    )


class VulnScanRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    code_snippet: str = Field(
        ...,
        alias="codeSnippet",
        min_length=AppSettings.CODE_SNIPPET_MIN_LENGTH,
        max_length=AppSettings.CODE_SNIPPET_MAX_LENGTH,
        description="The code snippet to analyze for vulnerabilities.",
    )
    language: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)] = Field(
        ..., description="The programming language of the code snippet."
    )


class VulnScanResult(BaseModel):
    vulnerabilities: List[str] = Field(
        ..., description="A list of potential vulnerabilities found in the code snippet."
    )
    suggestions: List[str] = Field(
        ..., description="A list of suggestions for fixing the identified vulnerabilities."
    )

    @property
    def is_clean(self) -> bool:
        return not self.vulnerabilities


class SummaryRequest(BaseModel):
    url: AnyHttpUrl = Field(..., description="The URL of the security article to summarize.")


class ArticleSummary(BaseModel):
    """Shape requested from the LLM by the summarization flow"""

    summary: str = Field(..., min_length=1, description="A summary of the security article.")


class SummaryResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    summary: str = Field(..., min_length=1, description="A summary of the security article.")
    article_extracted: bool = Field(
        True,
        alias="articleExtracted",
        description="False when no article text could be extracted from the URL",
    )


class ChatMessage(BaseModel):
    sender: Sender
    text: str


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, description="The user's latest chat message.")


class ChatResult(BaseModel):
    response: str = Field(..., description="The assistant's reply to the user's message.")


def violation_from_error(error: Dict[str, Any]) -> FieldViolation:
    loc = error.get("loc") or ("__root__",)
    field = ".".join(str(part) for part in loc)
    kind = error.get("type", "value_error")
    ctx = error.get("ctx") or {}

    if kind == "missing":
        message = f"{field} is required"
    elif kind == "string_too_short":
        min_length = ctx.get("min_length", 1)
        if min_length <= 1:
            message = f"{field} must not be empty"
        else:
            message = f"{field} must be at least {min_length} characters"
    elif kind == "string_too_long":
        message = f"{field} must not exceed {ctx.get('max_length')} characters"
    elif kind.startswith("url_"):
        message = f"{field} must be a valid URL"
    elif kind == "string_type":
        message = f"{field} must be a string"
    elif kind == "dict_type":
        message = f"{field} must be a JSON object"
    elif kind == "json_invalid":
        message = f"{field} is not valid JSON"
    else:
        message = f"{field}: {error.get('msg', 'invalid value')}"

    return FieldViolation(field=field, constraint=kind, message=message)


def _validate(model: Type[ModelT], data: Union[ModelT, Mapping[str, Any]]) -> ModelT:
    if isinstance(data, model):
        return data
    if not isinstance(data, Mapping):
        raise InputValidationError([
            FieldViolation(
                field="__root__",
                constraint="object_type",
                message=f"{model.__name__} must be a JSON object",
            )
        ])
    try:
        return model.model_validate(dict(data))
    except ValidationError as exc:
        raise InputValidationError(
            [violation_from_error(err) for err in exc.errors()]
        ) from exc


def validate_script_request(data: Union[ScriptRequest, Mapping[str, Any]]) -> ScriptRequest:
    return _validate(ScriptRequest, data)


def validate_vuln_scan_request(data: Union[VulnScanRequest, Mapping[str, Any]]) -> VulnScanRequest:
    return _validate(VulnScanRequest, data)


def validate_summary_request(data: Union[SummaryRequest, Mapping[str, Any]]) -> SummaryRequest:
    return _validate(SummaryRequest, data)


def validate_chat_request(data: Union[ChatRequest, Mapping[str, Any]]) -> ChatRequest:
    return _validate(ChatRequest, data)
