import logging
from dataclasses import dataclass
from typing import Optional

from core.config_loader import AppConfig, LlmConfig
from core.llm.gemini_service import GeminiService
from core.llm.interfaces import LLMProvider
from core.llm.openai_service import OpenAIService
from core.rate_limiter import CallRateLimiter
from etl.orchestrator import ResumeImportService
from etl.resume.extraction import ResumeExtractionService
from etl.resume.text_extractor import DocumentTextExtractor

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Application context container that holds all wired dependencies.

    Built once per process. The rate limiter lives here and is handed to
    the LLM provider, so every model call in the process shares one clock.
    DB access should be obtained via catalog_uow() per request.
    """
    config: AppConfig
    rate_limiter: CallRateLimiter
    llm_provider: Optional[LLMProvider]
    extractor: DocumentTextExtractor
    extraction_service: ResumeExtractionService
    import_service: ResumeImportService

    @classmethod
    def build(cls, config: AppConfig) -> "AppContext":
        """Build an AppContext from config.

        Args:
            config: Loaded application configuration

        Returns:
            Fully wired AppContext instance (no DB session attached)
        """
        rate_limiter = CallRateLimiter(config.llm.min_call_interval_seconds)
        llm_provider = cls._build_llm_provider(config.llm, rate_limiter)

        extractor = DocumentTextExtractor()
        extraction_service = ResumeExtractionService(llm_provider)
        import_service = ResumeImportService(extractor, extraction_service)

        return cls(
            config=config,
            rate_limiter=rate_limiter,
            llm_provider=llm_provider,
            extractor=extractor,
            extraction_service=extraction_service,
            import_service=import_service,
        )

    @staticmethod
    def _build_llm_provider(
        llm_config: LlmConfig, rate_limiter: CallRateLimiter
    ) -> Optional[LLMProvider]:
        """Build the configured provider, or None when no API key is set."""
        if not llm_config.api_key:
            logger.warning(
                "No LLM API key configured; resume parsing is unavailable and "
                "bullet extraction uses heuristics only"
            )
            return None

        model_config = {
            'temperature': llm_config.temperature,
            'max_retries': llm_config.max_retries,
            'safety_threshold': llm_config.safety_threshold,
        }
        if llm_config.model:
            model_config['model'] = llm_config.model

        if llm_config.provider == "openai":
            return OpenAIService(
                api_key=llm_config.api_key,
                base_url=llm_config.base_url,
                model_config=model_config,
                rate_limiter=rate_limiter,
            )
        return GeminiService(
            api_key=llm_config.api_key,
            model_config=model_config,
            rate_limiter=rate_limiter,
        )
