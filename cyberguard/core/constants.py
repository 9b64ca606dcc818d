from enum import Enum


class OllamaModels(Enum):
    """Supported Ollama model identifiers"""

    LLAMA3_8B = "llama3.1:8b"
    LLAMA3_70B = "llama3:70b"
    MISTRAL_7B = "mistral:7b"
    GEMMA_2_9B = "gemma2:9b"
    QWEN_CODER_7B = "qwen2.5-coder:7b"


class Sender(str, Enum):
    """Author of a chat transcript entry"""

    USER = "user"
    ASSISTANT = "assistant"


class AppSettings:
    """Central place for all application-level configuration"""

    ENVIRONMENT: str = "development"
    OLLAMA_MODEL: OllamaModels = OllamaModels.LLAMA3_8B
    OLLAMA_BASE_URL: str = "http://localhost:11434"
    LLM_TEMPERATURE: float = 0.2
    LLM_MAX_RETRIES: int = 0
    EXTRACTOR_TIMEOUT: float = 15.0
    EXTRACTOR_USER_AGENT: str = "Mozilla/5.0 (compatible; CyberGuardAI/0.1)"
    SKIP_EMPTY_ARTICLES: bool = False
    API_VERSION = "/v1"

    # Input bounds
    SCRIPT_DESCRIPTION_MIN_LENGTH: int = 10
    SCRIPT_DESCRIPTION_MAX_LENGTH: int = 500
    CODE_SNIPPET_MIN_LENGTH: int = 50
    CODE_SNIPPET_MAX_LENGTH: int = 5000
