import os
from dataclasses import dataclass


def _load_dotenv(path: str = ".env") -> None:
    """
    Minimal .env loader using only the standard library.
    Existing environment variables are not overridden.
    """
    if not os.path.exists(path):
        return

    with open(path, encoding="utf-8") as env_file:
        for raw_line in env_file:
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            if key not in os.environ:
                os.environ[key] = value


@dataclass
class AriSettings:
    base_url: str
    username: str
    password: str


@dataclass
class TimeoutSettings:
    ari_timeout: float
    http_max_connections: int


@dataclass
class Settings:
    ari: AriSettings
    timeouts: TimeoutSettings
    log_level: str


def get_settings(env_file: str = ".env") -> Settings:
    _load_dotenv(env_file)

    ari = AriSettings(
        base_url=os.getenv("ARI_BASE_URL", "http://127.0.0.1:8088/ari"),
        username=os.getenv("ARI_USERNAME", "asterisk"),
        password=os.getenv("ARI_PASSWORD", "changeme"),
    )

    timeouts = TimeoutSettings(
        ari_timeout=float(os.getenv("ARI_TIMEOUT", "10")),
        http_max_connections=int(os.getenv("HTTP_MAX_CONNECTIONS", "100")),
    )

    log_level = os.getenv("LOG_LEVEL", "INFO")

    return Settings(ari=ari, timeouts=timeouts, log_level=log_level)
