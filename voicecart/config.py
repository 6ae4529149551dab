from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {
        "env_file": ".env",
        "extra": "ignore",
        "env_prefix": "",
        "case_sensitive": False,
    }

    # Hugging Face (translation + default intent backend)
    hf_api_key: str = ""
    hf_chat_url: str = "https://router.huggingface.co/v1/chat/completions"
    hf_inference_url: str = "https://router.huggingface.co/hf-inference/models"
    intent_model: str = "Qwen/Qwen2.5-72B-Instruct"

    # Anthropic (alternate intent backend)
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-5-20250929"

    # Pipeline
    intent_backend: Literal["huggingface", "anthropic"] = "huggingface"
    pivot_language: str = "en"
    translation_models: dict[str, str] = {
        "hi": "Helsinki-NLP/opus-mt-hi-en",
        "es": "Helsinki-NLP/opus-mt-es-en",
        "fr": "Helsinki-NLP/opus-mt-fr-en",
        "de": "Helsinki-NLP/opus-mt-de-en",
        "ar": "Helsinki-NLP/opus-mt-ar-en",
    }
    backend_timeout_seconds: float = 30.0  # tolerates cold-start model loading

    # App
    environment: str = "development"
    log_level: str = "INFO"


settings = Settings()
