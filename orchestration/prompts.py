"""
Prompt builder for Terraform generation.

Three variants:
- INITIAL: nothing is staged for the workspace yet
- MODIFICATION: code exists and must be changed in place
- ERROR_FIX: the last attempt failed and needs a targeted fix

Every function here is pure.
"""

from enum import Enum
from typing import Optional

from core.domain.value_objects import FailureRecord

DEFAULT_PROVIDER = "DigitalOcean"


class PromptKind(str, Enum):
    INITIAL = "initial"
    MODIFICATION = "modification"
    ERROR_FIX = "error_fix"


def select_prompt_kind(
    existing_code: Optional[str], failure: Optional[FailureRecord] = None
) -> PromptKind:
    """Error-fix wins over modification, modification over initial."""
    if failure is not None:
        return PromptKind.ERROR_FIX
    if existing_code and existing_code.strip():
        return PromptKind.MODIFICATION
    return PromptKind.INITIAL


def _output_rules(provider: str) -> str:
    return f"""Output rules:
- Output ONLY Terraform resource and output blocks for {provider} infrastructure.
- Do NOT include terraform blocks, provider configurations, backend configuration or variable declarations. The environment already has:
  - the {provider} provider configured
  - backend configuration
  - the credentials variable
- Do NOT wrap the code in markdown code fences.
- Do NOT add explanations or commentary before or after the code."""


def _initial_prompt(description: str, provider: str) -> str:
    return f"""You are a DevOps engineer. OUTPUT ONLY TERRAFORM CODE, NO OTHER EXPLANATIONS.

Create Terraform code for {provider} based on this description:
{description}

{_output_rules(provider)}
- If the description does not ask for infrastructure, output nothing at all.

OUTPUT ONLY TERRAFORM CODE, NO OTHER EXPLANATIONS."""


def _modification_prompt(description: str, existing_code: str, provider: str) -> str:
    return f"""You are a DevOps engineer. OUTPUT ONLY TERRAFORM CODE, NO OTHER EXPLANATIONS.

This is the Terraform code currently deployed for {provider}:
{existing_code}

Modify it according to this request:
{description}

Modification rules:
- Change, add or remove ONLY the resources the request is about.
- Keep the names and references of every other resource exactly as they are.
- Output the complete resulting set of resource and output blocks, not a diff.

{_output_rules(provider)}

OUTPUT ONLY TERRAFORM CODE, NO OTHER EXPLANATIONS."""


def _error_fix_prompt(
    description: str, code: str, failure: FailureRecord, provider: str
) -> str:
    resource_hint = ""
    if failure.affected_resource:
        resource_hint = f"\nThe failing resource appears to be: {failure.affected_resource}\n"

    return f"""You are a DevOps engineer. OUTPUT ONLY TERRAFORM CODE, NO OTHER EXPLANATIONS.

The following Terraform code for {provider} was written for this request:
{description}

Code that was executed:
{code}

Executor output:
{failure.raw_output}

Error:
{failure.message}
{resource_hint}
Fix rules:
- Fix ONLY the issue described by the error. Do not refactor or rename anything else.
- Output the complete corrected set of resource and output blocks.

{_output_rules(provider)}

OUTPUT ONLY TERRAFORM CODE, NO OTHER EXPLANATIONS."""


def build_prompt(
    kind: PromptKind,
    description: str,
    existing_code: Optional[str] = None,
    failure: Optional[FailureRecord] = None,
    *,
    provider: str = DEFAULT_PROVIDER,
) -> str:
    """Render the prompt for `kind`.

    Raises:
        ValueError: If an input the variant needs is missing
    """
    if kind is PromptKind.INITIAL:
        return _initial_prompt(description, provider)

    if existing_code is None or not existing_code.strip():
        raise ValueError(f"{kind.value} prompt requires existing code")

    if kind is PromptKind.MODIFICATION:
        return _modification_prompt(description, existing_code, provider)

    if failure is None:
        raise ValueError("error_fix prompt requires a failure record")
    return _error_fix_prompt(description, existing_code, failure, provider)
