import logging
import secrets

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

_INSECURE_DEFAULT_KEY = "change-me-in-production"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="DORMKEEP_", extra="ignore")

    db_url: str = "sqlite:///dormkeep.db"

    # Fallback rates (satang) until an admin saves the system settings form.
    default_water_rate: int = 2000
    default_electricity_rate: int = 700
    default_room_rent: int = 300000
    default_late_fee: int = 0
    default_floor_count: int = 1
    due_day: int = 5

    log_level: str = "INFO"
    log_json: bool = False

    secret_key: str = _INSECURE_DEFAULT_KEY

    def get_secret_key(self) -> str:
        if self.secret_key == _INSECURE_DEFAULT_KEY:
            logger.warning(
                "DORMKEEP_SECRET_KEY is not set, using a random key. "
                "Sessions will not survive restarts. "
                "Set DORMKEEP_SECRET_KEY in your environment or .env file."
            )
            self.secret_key = secrets.token_urlsafe(32)
        return self.secret_key


settings = Settings()
