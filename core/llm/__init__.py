"""LLM Module - generative model providers and interfaces."""
from core.llm.interfaces import LLMProvider
from core.llm.gemini_service import GeminiService
from core.llm.openai_service import OpenAIService

__all__ = ['LLMProvider', 'GeminiService', 'OpenAIService']
