"""Text and image generation providers used by the newsroom."""

from src.generation.comfyui import ComfyUIClient, LoraSpec
from src.generation.exceptions import GenerationClientError, ProviderNotConfiguredError
from src.generation.gemini import GeminiClient
from src.generation.openai_client import OpenAIResponsesClient

__all__ = [
    "ComfyUIClient",
    "GeminiClient",
    "GenerationClientError",
    "LoraSpec",
    "OpenAIResponsesClient",
    "ProviderNotConfiguredError",
]
