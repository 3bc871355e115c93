from __future__ import annotations

import logging
import os
from typing import Optional

from kbase import db, repository
from kbase.dependencies import create_db_session
from kbase.environment import Settings

logger = logging.getLogger(__name__)


def bootstrap_tenant(session, settings: Settings) -> None:
    if not settings.bootstrap_tenant_slug:
        return
    if repository.get_tenant_by_slug(session, settings.bootstrap_tenant_slug) is not None:
        return
    tenant = repository.create_tenant(
        session,
        name=settings.bootstrap_tenant_name or settings.bootstrap_tenant_slug,
        slug=settings.bootstrap_tenant_slug,
    )
    logger.info("Bootstrapped tenant %s (%s)", tenant.slug, tenant.id)


def init_database(settings: Settings) -> None:
    db.run_migrations(settings.db_path)
    session = create_db_session(settings.db_path)
    try:
        bootstrap_tenant(session, settings)
    finally:
        session.close()


def configure_logging(log_level: Optional[str] = None) -> None:
    level_name = (log_level or os.getenv("KBASE_LOG_LEVEL", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(levelname)s [%(name)s] %(message)s",
        force=True,
    )
