# src/infrastructure/config.py
import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AppConfig:
    # catalog content is authored in this language; localize() is identity for it
    source_language: str = "en"
    # run template reconciliation during app startup
    auto_reconcile: bool = False
    # data overrides (None = packaged data)
    catalog_path: Optional[str] = None
    translations_root: Optional[str] = None
    templates_path: Optional[str] = None
    log_level: str = "INFO"


def env_bool(name: str, default: bool) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    return v.strip().lower() in {"1", "true", "yes", "on"}


def env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def env_str(name: str) -> Optional[str]:
    v = os.getenv(name)
    return v if v else None


def load_app_config() -> AppConfig:
    return AppConfig(
        source_language=os.getenv("SOURCE_LANGUAGE", "en").lower(),
        auto_reconcile=env_bool("AUTO_RECONCILE", False),
        catalog_path=env_str("CATALOG_PATH"),
        translations_root=env_str("TRANSLATIONS_ROOT"),
        templates_path=env_str("TEMPLATES_PATH"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
