import httpx
import pytest
from tenacity import wait_exponential, wait_none
from tenacity.wait import wait_base

from cyberguard.core.errors import GenerationFailure
from cyberguard.core.schemas import ScriptResult, VulnScanResult
from cyberguard.llm.generator import StructuredGenerator


@pytest.fixture
def structured_llm(mocker):
    """Chat model whose structured runnable is an AsyncMock"""
    runnable = mocker.Mock()
    runnable.ainvoke = mocker.AsyncMock()

    llm = mocker.Mock()
    llm.with_structured_output.return_value = runnable
    return llm, runnable


@pytest.mark.asyncio
async def test_returns_schema_instance(structured_llm):
    llm, runnable = structured_llm
    runnable.ainvoke.return_value = ScriptResult(script="echo stub")

    result = await StructuredGenerator(llm).invoke("prompt", ScriptResult)

    assert result == ScriptResult(script="echo stub")
    llm.with_structured_output.assert_called_once_with(ScriptResult)
    runnable.ainvoke.assert_awaited_once_with("prompt")


@pytest.mark.asyncio
async def test_dict_output_is_validated(structured_llm):
    llm, runnable = structured_llm
    runnable.ainvoke.return_value = {"vulnerabilities": [], "suggestions": []}

    result = await StructuredGenerator(llm).invoke("prompt", VulnScanResult)

    assert result == VulnScanResult(vulnerabilities=[], suggestions=[])


@pytest.mark.asyncio
async def test_missing_field_is_not_defaulted(structured_llm):
    llm, runnable = structured_llm
    runnable.ainvoke.return_value = {"vulnerabilities": ["SQL injection"]}

    with pytest.raises(GenerationFailure) as exc:
        await StructuredGenerator(llm).invoke("prompt", VulnScanResult)

    assert "does not conform" in str(exc.value)


@pytest.mark.asyncio
async def test_absent_output_fails(structured_llm):
    llm, runnable = structured_llm
    runnable.ainvoke.return_value = None

    with pytest.raises(GenerationFailure):
        await StructuredGenerator(llm).invoke("prompt", ScriptResult)


@pytest.mark.asyncio
async def test_empty_script_fails(structured_llm):
    llm, runnable = structured_llm
    runnable.ainvoke.return_value = {"script": ""}

    with pytest.raises(GenerationFailure):
        await StructuredGenerator(llm).invoke("prompt", ScriptResult)


@pytest.mark.asyncio
async def test_provider_error_is_wrapped_with_cause(structured_llm):
    llm, runnable = structured_llm
    boom = RuntimeError("model not found")
    runnable.ainvoke.side_effect = boom

    with pytest.raises(GenerationFailure) as exc:
        await StructuredGenerator(llm).invoke("prompt", ScriptResult)

    assert exc.value.cause is boom
    assert exc.value.__cause__ is boom


@pytest.mark.asyncio
async def test_no_retries_by_default(structured_llm):
    llm, runnable = structured_llm
    runnable.ainvoke.side_effect = httpx.ConnectError("connection refused")

    with pytest.raises(GenerationFailure):
        await StructuredGenerator(llm).invoke("prompt", ScriptResult)

    assert runnable.ainvoke.await_count == 1


@pytest.mark.asyncio
async def test_optional_retry_recovers_from_transient_error(structured_llm):
    llm, runnable = structured_llm
    runnable.ainvoke.side_effect = [
        httpx.ConnectError("connection refused"),
        ScriptResult(script="echo ok"),
    ]

    generator = StructuredGenerator(llm, max_retries=2, wait=wait_none())
    result = await generator.invoke("prompt", ScriptResult)

    assert result.script == "echo ok"
    assert runnable.ainvoke.await_count == 2


@pytest.mark.asyncio
async def test_retry_ignores_non_transient_errors(structured_llm):
    llm, runnable = structured_llm
    runnable.ainvoke.side_effect = ValueError("bad json")

    generator = StructuredGenerator(llm, max_retries=3, wait=wait_none())
    with pytest.raises(GenerationFailure):
        await generator.invoke("prompt", ScriptResult)

    assert runnable.ainvoke.await_count == 1


def test_default_wait_is_exponential_backoff(structured_llm):
    llm, _ = structured_llm

    generator = StructuredGenerator(llm)

    assert isinstance(generator.wait, wait_base)
    assert isinstance(generator.wait, wait_exponential)
    assert generator.max_retries == 0
