from pydantic import Field
from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str  # e.g. mongodb://localhost:27017/bms
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = []
    sequence_max_attempts: int = Field(default=3, ge=1)  # Attempts per allocation before giving up on duplicate-key conflicts
    sequence_backoff_ms: int = Field(default=100, ge=0)  # Delay unit between attempts, multiplied by the attempt number
    fiscal_timezone: str = "UTC"  # Time zone used to decide which fiscal year "today" belongs to

    model_config = {
        "env_file": [".env"],
        "env_prefix": "BMS_",
        "extra": "ignore",
    }
