"""Application settings and configuration management using Pydantic."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Main application settings combining all configuration sections."""

    # Environment and deployment
    environment: str = "development"
    debug: bool = False

    # Backend API settings
    api_base_url: str = "http://localhost:3000/api"
    api_timeout_seconds: float = 10.0

    # Mock backend settings
    mock_api_host: str = "0.0.0.0"
    mock_api_port: int = 3000
    mock_api_reload: bool = False
    mock_seed_enabled: bool = True

    # Draft settings
    draft_poll_interval_seconds: int = 3

    # Portfolio settings
    default_starting_balance: float = 10000.0
    default_liquid_funds: float = 5000.0
    default_lesson_rewards: float = 500.0
    total_value_mode: str = "recompute"  # 'recompute' or 'increment'

    # Trade settings
    trade_expiry_hours: int = 24

    # Logging settings
    log_level: str = "INFO"
    log_format: str = "structured"  # 'structured' or 'plain'
    log_file_enabled: bool = False
    log_file_path: str = "data/flit.log"
    log_max_file_size: str = "10MB"
    log_backup_count: int = 5

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "FLIT_",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
    }

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment setting."""
        valid_environments = ["development", "testing", "production"]
        if v.lower() not in valid_environments:
            raise ValueError(f"Environment must be one of: {valid_environments}")
        return v.lower()

    @field_validator("api_base_url")
    @classmethod
    def validate_api_base_url(cls, v):
        """Validate the backend URL and strip any trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("API base URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("api_timeout_seconds")
    @classmethod
    def validate_timeout(cls, v):
        """Validate request timeout is reasonable."""
        if v <= 0 or v > 120:
            raise ValueError("API timeout must be between 0 and 120 seconds")
        return v

    @field_validator("draft_poll_interval_seconds")
    @classmethod
    def validate_poll_interval(cls, v):
        """Validate draft polling interval."""
        if v < 1 or v > 300:
            raise ValueError("Draft poll interval must be between 1 and 300 seconds")
        return v

    @field_validator("mock_api_port")
    @classmethod
    def validate_port(cls, v):
        """Validate port number is in valid range."""
        if v < 1 or v > 65535:
            raise ValueError("Port must be between 1 and 65535")
        return v

    @field_validator(
        "default_starting_balance", "default_liquid_funds", "default_lesson_rewards"
    )
    @classmethod
    def validate_balances(cls, v):
        """Validate default balances are not negative."""
        if v < 0:
            raise ValueError("Default balances must not be negative")
        return v

    @field_validator("total_value_mode")
    @classmethod
    def validate_total_value_mode(cls, v):
        """Validate portfolio total value bookkeeping mode."""
        valid_modes = ["recompute", "increment"]
        if v.lower() not in valid_modes:
            raise ValueError(f"Total value mode must be one of: {valid_modes}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v):
        """Validate log format."""
        valid_formats = ["structured", "plain"]
        if v.lower() not in valid_formats:
            raise ValueError(f"Log format must be one of: {valid_formats}")
        return v.lower()

    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.environment == "testing"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Application configuration instance
    """
    return Settings()
