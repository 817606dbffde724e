from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "postgresql://fitlog:fitlog@db:5432/fitlog"
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Comma-separated allowed origins, or "*" to allow all.
    # Example: "https://myapp.com,https://api.myapp.com"
    CORS_ORIGINS: str = "*"

    # Fallbacks used when the user profile is missing or leaves a target unset.
    DEFAULT_CALORIE_TARGET: int = 2000
    DEFAULT_PROTEIN_TARGET: int = 100

    # Workout days per week the weekly scorecard grades against.
    WORKOUT_TARGET_DAYS: int = 5

    @property
    def cors_origins_list(self) -> list[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
