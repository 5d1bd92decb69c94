"""
LLM Provider Interface - Abstract base for generative model providers.

This module defines the interface for text-generation services (Gemini, OpenAI, etc.).
"""
from abc import ABC, abstractmethod


class LLMProvider(ABC):
    """
    Abstract Interface for generative model providers.
    """

    @abstractmethod
    def generate_text(self, prompt: str) -> str:
        """
        Send a single prompt and return the model's text answer.

        Raises:
            ModelCallError: If the call fails after retries or the answer is empty
        """
        pass
