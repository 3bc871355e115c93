from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from kbase.imports.uploads import IMPORT_UPLOAD_MAX_BYTES

_FALSE_VALUES = {"0", "false", "no", "off"}

DEFAULT_DB_PATH = "kbase.db"
DEFAULT_LANGUAGE = "en"


@dataclass(frozen=True)
class Settings:
    db_path: str = DEFAULT_DB_PATH
    log_level: str = "INFO"
    import_max_bytes: int = IMPORT_UPLOAD_MAX_BYTES
    default_language: str = DEFAULT_LANGUAGE
    bootstrap_tenant_name: Optional[str] = None
    bootstrap_tenant_slug: Optional[str] = None


def get_db_path() -> str:
    return os.getenv("KBASE_DB_PATH", DEFAULT_DB_PATH)


def load_settings() -> Settings:
    return Settings(
        db_path=get_db_path(),
        log_level=os.getenv("KBASE_LOG_LEVEL", "INFO").strip().upper() or "INFO",
        import_max_bytes=_get_positive_int("KBASE_IMPORT_MAX_BYTES", IMPORT_UPLOAD_MAX_BYTES),
        default_language=(
            os.getenv("KBASE_DEFAULT_LANGUAGE", DEFAULT_LANGUAGE).strip().lower()
            or DEFAULT_LANGUAGE
        ),
        bootstrap_tenant_name=_get_optional_str("KBASE_BOOTSTRAP_TENANT_NAME"),
        bootstrap_tenant_slug=_get_optional_str("KBASE_BOOTSTRAP_TENANT_SLUG"),
    )


def is_docker_runtime() -> bool:
    override = os.getenv("KBASE_DOCKER_RUNTIME")
    if override is not None:
        return override.strip().lower() not in _FALSE_VALUES
    return os.path.exists("/.dockerenv")


def _get_optional_str(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return None
    return value.strip() or None


def _get_positive_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        parsed = int(value.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer.") from exc
    if parsed <= 0:
        raise ValueError(f"{name} must be positive.")
    return parsed
