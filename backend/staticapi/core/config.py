import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

TRUE_VALUES = {"1", "true", "yes", "on"}


def _flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in TRUE_VALUES


@dataclass(frozen=True)
class Settings:
    database_url: str | None = None
    secret_key: str | None = None

    # stricter behaviour of the secured deployment, each switchable
    enforce_secret: bool = True
    enforce_static_exists: bool = True
    not_found_on_empty_list: bool = True
    serialize_upserts: bool = False

    store_timeout_seconds: float = 10.0
    store_retries: int = 2
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            database_url=os.getenv("DATABASE_URL"),
            # older deployments used the lower-case name
            secret_key=os.getenv("SECRET_KEY") or os.getenv("secret_key"),
            enforce_secret=_flag("ENFORCE_SECRET", True),
            enforce_static_exists=_flag("ENFORCE_STATIC_EXISTS", True),
            not_found_on_empty_list=_flag("NOT_FOUND_ON_EMPTY_LIST", True),
            serialize_upserts=_flag("SERIALIZE_UPSERTS", False),
            store_timeout_seconds=float(os.getenv("STORE_TIMEOUT_SECONDS", "10")),
            store_retries=max(0, int(os.getenv("STORE_RETRIES", "2"))),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
