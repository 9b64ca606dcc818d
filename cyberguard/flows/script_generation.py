from cyberguard.core.prompts import SCRIPT_GENERATION_PROMPT
from cyberguard.core.schemas import ScriptRequest, ScriptResult, validate_script_request
from cyberguard.flows.base import BaseFlow
from cyberguard.llm.generator import StructuredGenerator


class ScriptGenerationFlow(BaseFlow[ScriptRequest, ScriptResult]):
    name = "script_generation"
    template = SCRIPT_GENERATION_PROMPT
    output_schema = ScriptResult

    def validate(self, data):
        return validate_script_request(data)

    def _prompt_values(self, request: ScriptRequest):
        return {"description": request.description}


async def generate_security_script(request, generator: StructuredGenerator) -> ScriptResult:
    """Generate a security automation script from a task description."""
    return await ScriptGenerationFlow(generator).run(request)
