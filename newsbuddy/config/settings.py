"""Configuration settings for the newsbuddy backend."""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

# Load .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Keys (one per upstream)
    gemini_api_key: str = os.getenv("GEMINI_API_KEY", "")
    serpapi_api_key: str = os.getenv("SERPAPI_API_KEY", "")
    newsapi_api_key: str = os.getenv("NEWSAPI_API_KEY", "")
    elevenlabs_api_key: str = os.getenv("ELEVENLABS_API_KEY", "")

    # Upstream endpoints
    serpapi_url: str = "https://serpapi.com/search.json"
    newsapi_url: str = "https://newsapi.org/v2/top-headlines"
    elevenlabs_url: str = "https://api.elevenlabs.io/v1"

    # Language model (LiteLLM identifier)
    language_model: str = "gemini/gemini-2.0-flash"

    # Timeouts (seconds)
    upstream_timeout_seconds: float = 30.0
    speech_timeout_seconds: float = 120.0
    podcast_timeout_seconds: float = 600.0

    # Summaries
    summary_min_length: int = 10
    summary_temperature: float = 0.3
    summary_top_k: int = 20
    summary_top_p: float = 0.8
    summary_max_output_tokens: int = 50

    # News
    news_result_limit: int = 5
    default_news_query: str = "top news india"
    default_news_location: str = "India"
    headlines_country: str = "in"

    # Podcast
    podcast_max_articles: int = 5
    speech_max_chars: int = 2500
    speech_model: str = "eleven_multilingual_v2"
    speech_output_format: str = "mp3_44100_128"

    # HTTP
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    port: int = 5000

    # Paths
    project_root: Path = Path(__file__).parent.parent.parent
    package_dir: Path = Path(__file__).parent.parent
    config_dir: Path = package_dir / "config"
    audio_dir: Path = project_root / "data" / "podcasts"

    # Config files
    voices_file: Path = config_dir / "voices.yaml"

    class Config:
        env_file = ".env"
        extra = "ignore"


# Global settings instance
settings = Settings()
