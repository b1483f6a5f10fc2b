"""Configuration management."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml


@dataclass
class HuggingFaceConfig:
    """Hosted inference API settings."""
    base_url: str = "https://api-inference.huggingface.co/models"
    ner_model: str = "dslim/bert-base-NER"
    image_model: str = "google/vit-base-patch16-224"
    ner_timeout: float = 10.0
    image_fetch_timeout: float = 15.0
    classification_timeout: float = 20.0
    head_timeout: float = 10.0
    max_retries: int = 2
    initial_retry_delay: float = 1.0
    user_agent: str = "DisasterResponsePlatform/1.0"


@dataclass
class CacheConfig:
    """Time-to-live per call site, in hours."""
    location_ttl_hours: float = 1.0
    image_ttl_hours: float = 1.0
    social_media_ttl_hours: float = 0.5


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


@dataclass
class Settings:
    """Application settings."""

    # API Keys (from environment only)
    huggingface_api_key: Optional[str] = None

    # Config sections
    huggingface: HuggingFaceConfig = field(default_factory=HuggingFaceConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def ner_url(self) -> str:
        return f"{self.huggingface.base_url}/{self.huggingface.ner_model}"

    @property
    def image_model_url(self) -> str:
        return f"{self.huggingface.base_url}/{self.huggingface.image_model}"

    @property
    def has_inference_credentials(self) -> bool:
        return bool(self.huggingface_api_key)


def load_config(config_path: Path = Path("config.yaml")) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def get_settings(config_path: Path = Path("config.yaml")) -> Settings:
    """Get application settings from YAML config and environment."""
    config = load_config(config_path)

    # Credential is read from the environment only
    api_key = (
        os.getenv("HUGGINGFACE_API_KEY")
        or os.getenv("GEMINI_API_KEY")
        or os.getenv("HF_TOKEN")
        or None
    )

    settings = Settings(huggingface_api_key=api_key)

    if "huggingface" in config:
        for key, value in config["huggingface"].items():
            setattr(settings.huggingface, key, value)

    if "cache" in config:
        for key, value in config["cache"].items():
            setattr(settings.cache, key, float(value))

    if "logging" in config:
        for key, value in config["logging"].items():
            setattr(settings.logging, key, value)

    return settings
