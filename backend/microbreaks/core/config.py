from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Logging
    LOGGER: int = 20
    LOG_DIRECTORY: str = "logs"
    LOG_TO_FILE: bool = True

    # Server identity reported to the chat assistant
    SERVER_NAME: str = "micro-breaks-map-server"
    SERVER_VERSION: str = "1.0.0"

    HOST: str = "0.0.0.0"
    PORT: int = 3000
    CORS_ORIGINS: list[str] = ["*"]

    # Overpass (OpenStreetMap) Configuration
    OVERPASS_URL: str = "https://overpass-api.de/api/interpreter"
    OVERPASS_TIMEOUT: float = 20.0

    # Break spot lookup
    DEFAULT_RADIUS_METERS: float = 900
    PLACES_PER_CATEGORY: int = 5

    model_config = SettingsConfigDict(
        # Look for .env in the current folder OR the parent folder
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        extra="ignore"
    )

settings = Settings()
