"""Chat completion client implementations."""

from pairing_ai.llm.client.openai import OpenAIClient
from pairing_ai.llm.client.protocol import LLMClientProtocol


__all__ = [
    "LLMClientProtocol",
    "OpenAIClient",
]
