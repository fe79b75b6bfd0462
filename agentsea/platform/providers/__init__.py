"""Language model providers."""

from agentsea.platform.providers.litellm_provider import LiteLLMProvider

__all__ = ["LiteLLMProvider"]
