# ticketdesk/core/config.py
from typing import List, Optional, Union
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import json


class Settings(BaseSettings):
    # === MongoDB ===
    mongo_url: str = "mongodb://localhost:27017"
    db_name: str = "ticketdesk"
    mongo_tls: bool = False

    # === Security / JWT ===
    secret_key: str = "change-me"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 30
    refresh_token_expire_days: int = 30

    # === Login protection ===
    login_rate_limit: str = "5/minute"
    rate_limit_enabled: bool = True
    login_lock_threshold: int = 8
    login_lock_window_min: int = 15

    # === CORS ===
    # JSON (["http://a","https://b"]) or comma separated ("http://a,https://b")
    cors_origins: Union[str, List[str]] = ""

    # === Logging ===
    log_level: str = "INFO"

    # === Bootstrap admin (both must be set) ===
    admin_username: Optional[str] = None
    admin_password: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _parse_cors_origins(cls, v):
        if v is None:
            return []
        if isinstance(v, list):
            return v
        if isinstance(v, str):
            s = v.strip()
            if not s:
                return []
            if s.startswith("["):
                try:
                    data = json.loads(s)
                    if isinstance(data, list):
                        return [str(x).strip() for x in data if str(x).strip()]
                except ValueError:
                    # looks like JSON but is malformed: fall back to comma split
                    pass
            return [item.strip() for item in s.split(",") if item.strip()]
        return [str(v).strip()] if str(v).strip() else []


# Global instance shared by the whole app
settings = Settings()
