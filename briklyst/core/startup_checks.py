"""Database checks run once from the app lifespan, before serving traffic."""
from __future__ import annotations

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy.engine import Engine

from briklyst.core.config import AUTO_APPLY_MIGRATIONS, DATABASE_URL, IS_PROD, IS_TEST

logger = logging.getLogger(__name__)
MIGRATIONS_PREFIX = "[MIGRATIONS]"


def validate_database_environment() -> None:
    if IS_PROD and DATABASE_URL.startswith("sqlite"):
        logger.critical("%s SQLite is forbidden in production", MIGRATIONS_PREFIX)
        raise RuntimeError("SQLite is forbidden in production environment")


def _load_alembic_config(alembic_config_path: Path) -> Config:
    if not alembic_config_path.exists():
        logger.critical("%s alembic config not found path=%s", MIGRATIONS_PREFIX, alembic_config_path)
        raise RuntimeError("alembic config not found")
    alembic_cfg = Config(str(alembic_config_path))
    alembic_cfg.set_main_option("sqlalchemy.url", DATABASE_URL)
    return alembic_cfg


def expected_heads(alembic_cfg: Config) -> set[str]:
    return set(ScriptDirectory.from_config(alembic_cfg).get_heads())


def database_heads(engine: Engine) -> set[str]:
    with engine.connect() as connection:
        return set(MigrationContext.configure(connection).get_current_heads())


def apply_migrations(*, alembic_config_path: Path) -> None:
    """Upgrade to head in-process when AUTO_APPLY_MIGRATIONS is enabled."""
    if not AUTO_APPLY_MIGRATIONS:
        logger.info("%s auto migration disabled", MIGRATIONS_PREFIX)
        return

    logger.info("%s applying migrations to head", MIGRATIONS_PREFIX)
    command.upgrade(_load_alembic_config(alembic_config_path), "head")
    logger.info("%s migrations applied", MIGRATIONS_PREFIX)


def ensure_migrations_applied(*, engine: Engine, alembic_config_path: Path) -> None:
    if IS_TEST:
        logger.info("%s skipped migration check in test environment", MIGRATIONS_PREFIX)
        return

    expected = expected_heads(_load_alembic_config(alembic_config_path))
    current = database_heads(engine)
    if not current:
        logger.critical("%s database has no migration state", MIGRATIONS_PREFIX)
        raise RuntimeError("Database has no migration state")

    if current != expected:
        logger.critical(
            "%s pending migration detected current=%s expected=%s",
            MIGRATIONS_PREFIX,
            sorted(current),
            sorted(expected),
        )
        raise RuntimeError("Pending migrations detected")

    logger.info("%s migration state verified", MIGRATIONS_PREFIX)
