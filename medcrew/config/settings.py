"""Application configuration and settings."""

from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Service Configuration
    service_name: str = "medcrew-ai"
    port: int = 8005
    environment: str = "development"

    # Generative AI endpoint (any OpenAI-compatible chat completions API)
    llm_api_key: Optional[str] = None
    llm_endpoint: str = "https://models.inference.ai.azure.com"
    model_name: str = "gpt-4o-mini"
    vision_model_name: str = "gpt-4o"
    model_temperature: float = 0.7
    model_max_tokens: int = 1000

    # CORS
    cors_origins: List[str] = ["http://localhost:5173"]

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False
        protected_namespaces = ("settings_",)


# Global settings instance
settings = Settings()
