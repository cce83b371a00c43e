from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "TaggerLink"
    debug: bool = False

    database_url: str = "sqlite+aiosqlite:///./taggerlink.db"

    tagger_origin: str = "https://tagger.scryfall.com"
    tagger_frame_id: str = "tagger-iframe"

    # Seconds to wait for the tagger frame to answer a lookup.
    # None waits forever (no reply means the request never resolves).
    tagger_request_timeout: float | None = 15.0

    preview_max_visible: int = 8

    user_agent: str = "TaggerLink/1.0"


settings = Settings()
