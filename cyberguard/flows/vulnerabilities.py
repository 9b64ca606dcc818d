from cyberguard.core.prompts import VULNERABILITY_PROMPT
from cyberguard.core.schemas import VulnScanRequest, VulnScanResult, validate_vuln_scan_request
from cyberguard.flows.base import BaseFlow
from cyberguard.llm.generator import StructuredGenerator


class VulnerabilityScanFlow(BaseFlow[VulnScanRequest, VulnScanResult]):
    name = "vulnerability_scan"
    template = VULNERABILITY_PROMPT
    output_schema = VulnScanResult

    def validate(self, data):
        return validate_vuln_scan_request(data)

    def _prompt_values(self, request: VulnScanRequest):
        return {"code_snippet": request.code_snippet, "language": request.language}


async def identify_vulnerabilities(request, generator: StructuredGenerator) -> VulnScanResult:
    """Analyze a code snippet. Empty lists mean no issues were found."""
    return await VulnerabilityScanFlow(generator).run(request)
