import pydantic_settings as settings


class Settings(settings.BaseSettings):
    model_config = settings.SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_prefix="ASSET_MANIFEST_",
        validate_default=True
    )
