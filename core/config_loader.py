import yaml
import os
from typing import List, Optional, Literal
from pydantic import BaseModel, Field

from etl.resume.text_extractor import PDF_MIME_TYPES, WORD_MIME_TYPES


class DatabaseConfig(BaseModel):
    url: str = "sqlite:///careerlog.db"


class LlmConfig(BaseModel):
    provider: Literal["gemini", "openai"] = "gemini"
    api_key: Optional[str] = None  # None = model not configured, heuristics only
    base_url: Optional[str] = None  # OpenAI-compatible endpoints only
    model: Optional[str] = None  # None = the provider's own default model
    temperature: float = 0.0
    min_call_interval_seconds: float = 1.0
    safety_threshold: str = "BLOCK_MEDIUM_AND_ABOVE"  # Gemini only
    max_retries: int = 3


class UploadConfig(BaseModel):
    max_size_bytes: int = 10 * 1024 * 1024
    allowed_extensions: List[str] = Field(default_factory=lambda: [".pdf", ".doc", ".docx"])
    allowed_mime_types: List[str] = Field(
        default_factory=lambda: sorted(PDF_MIME_TYPES | WORD_MIME_TYPES)
    )


class WebConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8080


class AuthConfig(BaseModel):
    """
    The upstream identity provider authenticates the caller and forwards
    a stable subject id in this header.
    """
    user_header: str = "X-Auth-Subject"


class AppConfig(BaseModel):
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    llm: LlmConfig = Field(default_factory=LlmConfig)
    upload: UploadConfig = Field(default_factory=UploadConfig)
    web: WebConfig = Field(default_factory=WebConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)


API_KEY_ENV = {
    "gemini": "GOOGLE_GEMINI_API_KEY",
    "openai": "OPENAI_API_KEY",
}


def load_config(config_path: str = "config.yaml") -> AppConfig:
    # If not found at relative path (e.g. running from root), try the repo root
    if not os.path.exists(config_path):
        base_dir = os.path.dirname(os.path.abspath(__file__))
        config_path = os.path.join(base_dir, "..", "config.yaml")

    data = {}
    if os.path.exists(config_path):
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}

    database = data.setdefault('database', {}) or {}
    llm = data.setdefault('llm', {}) or {}
    web = data.setdefault('web', {}) or {}
    data['database'], data['llm'], data['web'] = database, llm, web

    # Allow env var override for DB URL
    env_db_url = os.environ.get("DATABASE_URL")
    if env_db_url:
        database['url'] = env_db_url

    env_provider = os.environ.get("LLM_PROVIDER")
    if env_provider:
        llm['provider'] = env_provider

    # API key comes from the provider's own variable
    env_api_key = os.environ.get(API_KEY_ENV.get(llm.get('provider', 'gemini'), ""))
    if env_api_key:
        llm['api_key'] = env_api_key

    env_llm_base_url = os.environ.get("LLM_BASE_URL")
    if env_llm_base_url:
        llm['base_url'] = env_llm_base_url

    env_host = os.environ.get("WEB_HOST")
    if env_host:
        web['host'] = env_host
    env_port = os.environ.get("WEB_PORT")
    if env_port:
        web['port'] = int(env_port)

    return AppConfig(**data)
