"""Code generation helpers shared by the caller and the convergence loop."""

import re

from core.application.interfaces import IGenerationClient

_LEADING_FENCE = re.compile(r"^\s*```[\w+-]*[ \t]*\n?")
_TRAILING_FENCE = re.compile(r"\n?[ \t]*```\s*$")


def strip_code_fences(text: str) -> str:
    """Drop a leading ```lang fence, a trailing ``` fence and outer whitespace."""
    code = _LEADING_FENCE.sub("", text or "", count=1)
    code = _TRAILING_FENCE.sub("", code, count=1)
    return code.strip()


async def generate_code(generator: IGenerationClient, prompt: str) -> str:
    """Ask the generator for code and clean up the reply.

    Raises:
        GenerationError: Propagated from the generator
    """
    raw = await generator.generate(prompt)
    return strip_code_fences(raw)
