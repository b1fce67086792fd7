# api/config.py
"""Configuration management for the travel planner API."""
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class ModelSettings:
    """Chat completion parameters shared by every generation request."""

    model: str = "gpt-3.5-turbo"
    temperature: float = 0.7
    max_tokens: int = 4000


def get_openai_api_key():
    """Get OpenAI API key from environment."""
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        raise ValueError("OPENAI_API_KEY not set")
    return api_key


def get_model_settings():
    """Get chat model configuration, overridable from the environment."""
    return ModelSettings(
        model=os.getenv("OPENAI_CHAT_MODEL", "gpt-3.5-turbo"),
        temperature=float(os.getenv("OPENAI_TEMPERATURE", "0.7")),
        max_tokens=int(os.getenv("OPENAI_MAX_TOKENS", "4000")),
    )


def get_google_maps_config():
    """Get Google Maps configuration."""
    return {
        "api_key": os.getenv("GOOGLE_MAPS_API_KEY", ""),
        "photo_max_width": int(os.getenv("GOOGLE_MAPS_PHOTO_MAX_WIDTH", "800")),
        "nearby_radius": int(os.getenv("GOOGLE_MAPS_NEARBY_RADIUS", "500")),
    }


def get_port():
    """Get port configuration."""
    return int(os.getenv("PORT", 5000))


def get_cors_origins():
    """Get allowed CORS origins for the front-end."""
    return os.getenv("CORS_ORIGINS", "*").split(",")
