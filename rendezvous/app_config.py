from pydantic import BaseModel

from rendezvous.config import config


def _split_csv(value: str | None) -> list[str]:
    return [x.strip() for x in (value or "").split(",") if x.strip()]


class AppEnvironConfig(BaseModel):
    DEBUG: bool = (config.get("DEBUG") or "false").strip().lower() == "true"

    # Base URL of the web client; shareable viewing links are built from it
    WEB_CLIENT_URL: str = (
        config.get("WEB_CLIENT_URL") or ""
    ).strip() or "https://web-client-pi-two.vercel.app/"

    # Server configuration
    API_HOST: str = (config.get("API_HOST") or "").strip() or "0.0.0.0"
    API_PORT: int = int((config.get("PORT") or config.get("API_PORT") or "").strip() or 3000)
    API_CORS_ORIGINS: list[str] = _split_csv(config.get("API_CORS_ORIGINS")) or ["*"]

    # Outbound messages buffered per connection before new ones are dropped
    SEND_QUEUE_SIZE: int = int((config.get("SEND_QUEUE_SIZE") or "").strip() or 256)

    # Observability
    LOGFIRE_ENABLE: bool = (config.get("LOGFIRE_ENABLE") or "false").strip().lower() == "true"
    LOGFIRE_TOKEN: str | None = (config.get("LOGFIRE_TOKEN") or "").strip() or None


_app_environ_config = AppEnvironConfig()


def get_app_environ_config() -> AppEnvironConfig:
    return _app_environ_config
