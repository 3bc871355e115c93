from __future__ import annotations

from pathlib import Path

from alembic import command
from alembic.config import Config

REPO_ROOT = Path(__file__).resolve().parents[1]


def run_migrations(db_path: str) -> None:
    command.upgrade(_alembic_config(db_path), "head")


def _alembic_config(db_path: str) -> Config:
    # No ini file: alembic.ini's logging section would reset the app's log config.
    config = Config()
    config.set_main_option("script_location", str(REPO_ROOT / "migrations"))
    config.set_main_option("sqlalchemy.url", f"sqlite:///{db_path}")
    return config
