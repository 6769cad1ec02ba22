"""
Настройки резолвера из окружения.

Формат файла .env
RDNS_NAMESERVERS = "10.15.12.100,10.15.12.200"   (пусто - системный /etc/resolv.conf)
RDNS_TIMEOUT = 2.0                                (секунд на один PTR-запрос)
RDNS_PROGRESS_INTERVAL = 1                        (период вывода прогресса)
"""
import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

from rdns_filter.exceptions import ConfigurationError

DEFAULT_PROGRESS_INTERVAL = 1.0


@dataclass
class Settings:
    nameservers: List[str] = field(default_factory=list)
    timeout: Optional[float] = None
    progress_interval: float = DEFAULT_PROGRESS_INTERVAL


def _float_env(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}")
    return value


def load_settings() -> Settings:
    """Читает .env (если есть) и переменные окружения"""
    load_dotenv()

    nameservers = [ns.strip() for ns in os.getenv("RDNS_NAMESERVERS", "").split(",") if ns.strip()]

    return Settings(
        nameservers=nameservers,
        timeout=_float_env("RDNS_TIMEOUT", None),
        progress_interval=_float_env("RDNS_PROGRESS_INTERVAL", DEFAULT_PROGRESS_INTERVAL),
    )
