import pytest
from unittest.mock import Mock
from httpx import Response

from cyberguard.llm.generator import StructuredGenerator


VULNERABLE_PYTHON = (
    "import sqlite3\n"
    "def find_user(conn, name):\n"
    "    return conn.execute(\"SELECT * FROM users WHERE name = '\" + name + \"'\").fetchall()\n"
)


@pytest.fixture
def vuln_payload():
    return {"codeSnippet": VULNERABLE_PYTHON, "language": "python"}


@pytest.fixture
def make_generator(mocker):
    """Generator stub that answers every call with ``payload``.

    Pass ``error`` to make every call raise instead.
    """
    def factory(payload=None, error=None):
        generator = mocker.Mock(spec=StructuredGenerator)

        async def invoke(prompt, output_schema):
            if error is not None:
                raise error
            return output_schema.model_validate(payload)

        generator.invoke = mocker.AsyncMock(side_effect=invoke)
        return generator

    return factory


@pytest.fixture
def make_extractor(mocker):
    def factory(content=""):
        extractor = mocker.Mock()
        extractor.extract = mocker.AsyncMock(return_value=content)
        return extractor

    return factory


@pytest.fixture
def mock_httpx_client(mocker):
    """Mock httpx.AsyncClient completely"""
    mock_client = mocker.Mock()

    mock_response = Mock(spec=Response)
    mock_response.raise_for_status.return_value = None
    mock_response.headers = {"content-type": "text/html; charset=utf-8"}
    mock_response.text = (
        "<html><body><h1>Patch Tuesday</h1>"
        "<p>Microsoft fixed a critical remote code execution flaw.</p>"
        "</body></html>"
    )

    mock_client.get = mocker.AsyncMock(return_value=mock_response)
    mock_client.aclose = mocker.AsyncMock()

    mocker.patch("httpx.AsyncClient", return_value=mock_client)
    return mock_client
