"""Application configuration with environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Environment
    ENV: str = "dev"

    # App Version (format: a.bc.de - major.feature.patch)
    VERSION: str = "0.06.00"

    # Organization calendar (IANA name, used when an org has no timezone set)
    DEFAULT_TIMEZONE: str = "Asia/Kolkata"

    # Batch insights
    UPCOMING_PAYMENTS_DAYS: int = 14  # Follow-up calendar window
    THIS_WEEK_DAYS: int = 7  # Leading slice of the window counted as "this week"
    AGING_BRACKET_DAYS: int = 30  # Width of the 0-30 / 31-60 receivables brackets

    @property
    def is_dev(self) -> bool:
        return self.ENV == "dev"


settings = Settings()
