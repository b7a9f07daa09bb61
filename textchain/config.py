"""
Text Chain Service Configuration
"""

from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # ===== Service =====
    SERVICE_NAME: str = Field(default="textchain-service", env="SERVICE_NAME")  # type: ignore
    SERVICE_VERSION: str = Field(default="1.0.0", env="SERVICE_VERSION")  # type: ignore
    HOST: str = Field(default="0.0.0.0", env="HOST")  # type: ignore
    PORT: int = Field(default=8000, env="PORT")  # type: ignore
    LOG_LEVEL: str = Field(default="info", env="LOG_LEVEL")  # type: ignore
    DEBUG: bool = Field(default=False, env="DEBUG")  # type: ignore

    # ===== CORS =====
    CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8080"], env="CORS_ORIGINS"  # type: ignore
    )

    # ===== Markov Chain =====
    MARKOV_ORDER: int = Field(default=2, env="MARKOV_ORDER")  # type: ignore
    # ShortArrayCodingDictionary trains slower but uses the least memory
    MARKOV_DICTIONARY: str = Field(
        default="ShortHashArrayCodingDictionary", env="MARKOV_DICTIONARY"  # type: ignore
    )
    MARKOV_DEFAULT_LENGTH: int = Field(default=500, env="MARKOV_DEFAULT_LENGTH")  # type: ignore
    MARKOV_MAX_LENGTH: int = Field(default=10000, env="MARKOV_MAX_LENGTH")  # type: ignore
    MARKOV_RANDOM_SEED: Optional[int] = Field(default=None, env="MARKOV_RANDOM_SEED")  # type: ignore

    # >>> pydantic v2 settings config <<<
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


settings = Settings()
