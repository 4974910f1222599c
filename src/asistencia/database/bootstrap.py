from __future__ import annotations

import logging
import re
from pathlib import Path

from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"

# the target database comes from DB_CONFIG, not from the file
_DATABASE_SELECTION = re.compile(r"^(CREATE\s+DATABASE|USE)\b", re.IGNORECASE)


def schema_statements(sql: str) -> list[str]:
    """Split schema.sql into the DDL statements to run.

    The file holds plain DDL: ``--`` comment lines are dropped and statements
    are split on ``;``. No statement in it carries a quoted semicolon.
    """
    body = "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))
    statements = (stmt.strip() for stmt in body.split(";"))
    return [stmt for stmt in statements if stmt and not _DATABASE_SELECTION.match(stmt)]


def _run(target: DBConfig, statements: list[str], *, with_database: bool = True) -> None:
    conn = DatabaseConnection(target).connect(with_database=with_database)
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    _run(
        target,
        [f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"],
        with_database=False,
    )


def apply_schema(db_config: dict, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    ensure_database_exists(db_config)
    target = DBConfig.from_dict(db_config)
    _run(target, schema_statements(Path(schema_path).read_text(encoding="utf-8")))
    logger.info("schema applied to %s", target.describe())


def list_tables(db_config: dict) -> list[str]:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
