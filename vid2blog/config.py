"""
Configuration settings for the Vid2Blog application.
"""

import os
from pathlib import Path
from dotenv import load_dotenv


# Ensure environment variables are loaded
load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Base configuration class."""

    # Application info
    APP_NAME = "Vid2Blog"
    APP_VERSION = "0.2.0"

    # Data directories
    BASE_DIR = Path(__file__).resolve().parent.parent.absolute()
    DATA_DIR = Path(os.getenv("DATA_DIR", BASE_DIR / "data"))
    ARTICLES_DIR = Path(os.getenv("ARTICLES_DIR", DATA_DIR / "articles"))

    # Language model settings for the optional AI generation path
    LLM_PROVIDER = os.getenv("LLM_PROVIDER", "groq")
    LLM_API_KEY = os.getenv("GROQ_API_KEY")
    DEFAULT_ARTICLE_MODEL = os.getenv("ARTICLE_MODEL", "llama-3.3-70b-versatile")
    LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.7"))
    LLM_TIMEOUT_SECONDS = float(os.getenv("LLM_TIMEOUT_SECONDS", "30"))
    USE_AI_GENERATION = _env_flag("USE_AI_GENERATION")

    DEBUG = False
    LOG_LEVEL = "INFO"

    @classmethod
    def initialize(cls):
        """Initialize the application configuration."""
        cls.ARTICLES_DIR.mkdir(parents=True, exist_ok=True)

        # The deterministic generator works without a key
        if cls.USE_AI_GENERATION and not cls.LLM_API_KEY:
            print("WARNING: USE_AI_GENERATION is set but GROQ_API_KEY is missing.")
            print("Articles will be produced by the template generator.")


class DevelopmentConfig(Config):
    """Development configuration."""

    DEBUG = True
    LOG_LEVEL = "DEBUG"


class ProductionConfig(Config):
    """Production configuration."""

    DEBUG = False
    LOG_LEVEL = "INFO"


# Determine which configuration to use based on environment
def get_config():
    """Get the appropriate configuration based on environment."""
    env = os.getenv("ENVIRONMENT", "development").lower()
    if env == "production":
        return ProductionConfig
    else:
        return DevelopmentConfig


# Create a config instance
config = get_config()
config.initialize()
