from .generation_client import AnthropicGenerationClient

__all__ = ["AnthropicGenerationClient"]
