from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from fxwidget.models.constants import enabled_codes


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG,
    EXTENDED_CURRENCIES, DEFAULT_FROM_CURRENCY, DEFAULT_TO_CURRENCY).
    """

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore"
    )

    # Basic app metadata
    app_name: str = "Currency Converter"
    debug: bool = False
    version: str = "0.1.0"

    # Currency set: the extended table adds KRW to JPY / EUR / GBP
    extended_currencies: bool = True

    # Initial widget pair
    default_from_currency: str = "JPY"
    default_to_currency: str = "KRW"

    # strftime pattern for history timestamps
    history_time_format: str = "%H:%M"

    def init_post_load(self) -> None:
        """Normalize the default pair and check it against the enabled set."""
        self.default_from_currency = self.default_from_currency.strip().upper()
        self.default_to_currency = self.default_to_currency.strip().upper()
        allowed = set(enabled_codes(self.extended_currencies))
        for field, code in (
            ("default_from_currency", self.default_from_currency),
            ("default_to_currency", self.default_to_currency),
        ):
            if code not in allowed:
                raise ValueError(
                    f"Unsupported {field} '{code}'. Allowed: {sorted(allowed)}"
                )


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
