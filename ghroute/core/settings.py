import json
from functools import lru_cache
from typing import Annotated, Dict, List
from pydantic_settings import BaseSettings, NoDecode
from pydantic import field_validator


class Settings(BaseSettings):
    # API Configuration
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ALLOWED_ORIGINS: Annotated[List[str], NoDecode] = ["*"]
    LOG_LEVEL: str = "INFO"

    # Routing service
    GRAPHHOPPER_URL: str = "https://graphhopper.com/api/1/route"
    GRAPHHOPPER_API_KEY: str | None = None
    POST_REQUEST: bool = True
    CONNECT_TIMEOUT_MS: int = 5000

    # Navigation compatibility endpoint
    NAVIGATION_PROFILES: Annotated[Dict[str, str], NoDecode] = {
        "driving": "car",
        "driving-traffic": "car",
        "walking": "foot",
        "cycling": "bike",
    }
    SUPPORTED_LOCALES: Annotated[List[str], NoDecode] = ["en_US", "en", "de", "fr", "es", "it", "pt_BR"]

    # Environment name
    ENVIRONMENT: str = "development"

    @field_validator("ALLOWED_ORIGINS", "SUPPORTED_LOCALES", mode="before")
    @classmethod
    def assemble_list(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, str):
            return json.loads(v)
        elif isinstance(v, list):
            return v
        raise ValueError(v)

    @field_validator("NAVIGATION_PROFILES", mode="before")
    @classmethod
    def assemble_profiles(cls, v: str | Dict[str, str]) -> Dict[str, str]:
        # "driving=car,walking=foot"
        if isinstance(v, str) and not v.startswith("{"):
            profiles = {}
            for pair in v.split(","):
                if "=" not in pair:
                    raise ValueError(f"Invalid profile mapping '{pair}'")
                mapbox_profile, gh_profile = pair.split("=", 1)
                profiles[mapbox_profile.strip()] = gh_profile.strip()
            return profiles
        elif isinstance(v, str):
            return json.loads(v)
        return v

    class Config:
        case_sensitive = True  # Variables are case-sensitive
        env_file = ".env"      # Load environment variables from .env file
        env_file_encoding = "utf-8" # Encoding for the .env file


@lru_cache() # Cache the settings object for performance
def get_settings() -> Settings:
    return Settings()
