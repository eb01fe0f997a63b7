"""
Failure extraction from executor output.

Terraform prints diagnostics as

    ╷
    │ Error: creating Droplet: POST ...: 422 invalid size
    │
    │   with digitalocean_droplet.web,
    │   on main.tf line 1, in resource "digitalocean_droplet" "web":
    ╵

so the second line after the "Error:" marker names the resource. This is
a best-effort heuristic over free-form text, not a parse of the executor's
output grammar: missing a resource is fine, crashing is not.
"""

from typing import Optional

from core.domain.value_objects import ActionResult, FailureRecord

ERROR_MARKER = "Error:"
DESCRIPTOR_OFFSET = 2
_GUTTER_CHARS = "│╷╵"
_NO_MESSAGE = "action failed without an error message"


def extract_failure(result: ActionResult) -> FailureRecord:
    """Build a FailureRecord from a failed ActionResult. Never raises."""
    error_text = result.error_message or ""
    return FailureRecord(
        message=error_text.strip() or _NO_MESSAGE,
        raw_output=result.output or "",
        affected_resource=find_affected_resource(error_text),
    )


def find_affected_resource(error_text: str) -> Optional[str]:
    lines = error_text.splitlines()
    for index, line in enumerate(lines):
        if ERROR_MARKER not in line:
            continue
        target = index + DESCRIPTOR_OFFSET
        if target >= len(lines):
            return None
        descriptor = lines[target].strip().strip(_GUTTER_CHARS).strip()
        return descriptor or None
    return None
