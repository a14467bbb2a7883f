import os

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36"
)

class Settings:
    # Server identity
    SERVER_NAME: str = os.getenv("SERVER_NAME", "mcp-fetch")
    SERVER_VERSION: str = os.getenv("SERVER_VERSION", "0.1.0")

    # Transport (only used by the SSE/HTTP app)
    PORT: int = int(os.getenv("PORT", "3000"))
    URI_PREFIX: str = os.getenv("URI_PREFIX", "")

    # Fetching
    DEFAULT_TIMEOUT_MS: int = int(os.getenv("DEFAULT_TIMEOUT_MS", "30000"))
    USER_AGENT: str = os.getenv("USER_AGENT", DEFAULT_USER_AGENT)
    # Playwright / JS rendering
    PLAYWRIGHT_HEADLESS: bool = os.getenv("PLAYWRIGHT_HEADLESS", "1").lower() in ("1", "true", "yes")

    # Upper bound on browsers running at once in a batch fetch
    MAX_CONCURRENT_FETCHES: int = int(os.getenv("MAX_CONCURRENT_FETCHES", "4"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

settings = Settings()
