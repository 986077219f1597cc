"""Default settings for talking to surf-forecast.com and serving pages."""

DEFAULT_BASE_URL = "https://www.surf-forecast.com"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_USER_AGENT = "glassy/0.1.0"

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080
DEFAULT_CACHE_MAX_AGE_SECONDS = 3600  # 1 hour

DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
