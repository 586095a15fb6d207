import os
import threading


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).lower() in ["true", "1", "yes", "on"]


class BackendSettings:
    _instance = None
    _lock = threading.Lock()

    def __init__(self):
        self.DEBUG_MODE = os.environ.get("DEBUG_MODE", "development")
        self.LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

        # Security: Force disable debug info in API responses (overrides DEBUG_MODE)
        self.DISABLE_API_DEBUG_INFO = _env_flag("DISABLE_API_DEBUG_INFO")

        # Localization
        self.DEFAULT_LOCALE = os.environ.get("DEFAULT_LOCALE", "en")

        # Cache TTLs (seconds)
        self.PRODUCT_LIST_CACHE_TTL = int(os.environ.get("PRODUCT_LIST_CACHE_TTL", "240"))
        self.REVIEW_LIST_CACHE_TTL = int(os.environ.get("REVIEW_LIST_CACHE_TTL", "240"))
        self.REVIEW_CACHE_TTL = int(os.environ.get("REVIEW_CACHE_TTL", "240"))
        self.PRODUCT_CACHE_TTL = int(os.environ.get("PRODUCT_CACHE_TTL", "240"))

        # Cached pages stay stale until their TTL expires unless this is enabled
        self.CACHE_INVALIDATE_ON_WRITE = _env_flag("CACHE_INVALIDATE_ON_WRITE")

        # Authentication
        self.ACCESS_TOKEN_TTL = int(os.environ.get("ACCESS_TOKEN_TTL", str(60 * 60)))

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super(BackendSettings, cls).__new__(cls)
        return cls._instance

    @property
    def include_debug_info(self) -> bool:
        return (
            self.DEBUG_MODE.lower() in ['dev', 'development', 'local']
            and not self.DISABLE_API_DEBUG_INFO
        )

settings = BackendSettings()
