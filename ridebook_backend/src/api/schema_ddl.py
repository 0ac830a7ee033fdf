"""
Render the schema as CREATE TABLE / CREATE INDEX statements.

Usage:
    python -m src.api.schema_ddl [postgresql|sqlite|mysql]
"""

from __future__ import annotations

import sys
from typing import List

from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.engine import Dialect
from sqlalchemy.schema import CreateIndex, CreateTable

from src.api.models import payment, rating, ride, user, vehicle  # noqa: F401
from src.api.models.base import Base

_DIALECTS = {
    "postgresql": postgresql.dialect,
    "sqlite": sqlite.dialect,
    "mysql": mysql.dialect,
}


def _dialect(name: str) -> Dialect:
    try:
        return _DIALECTS[name]()
    except KeyError:
        raise ValueError(f"Unsupported dialect: {name}. Choose one of {', '.join(_DIALECTS)}.") from None


# PUBLIC_INTERFACE
def ddl_statements(dialect_name: str = "postgresql") -> List[str]:
    """DDL for every table in foreign-key order, each table followed by its indexes."""
    dialect = _dialect(dialect_name)
    statements: List[str] = []
    for table in Base.metadata.sorted_tables:
        statements.append(str(CreateTable(table).compile(dialect=dialect)).strip() + ";")
        for index in sorted(table.indexes, key=lambda ix: ix.name or ""):
            statements.append(str(CreateIndex(index).compile(dialect=dialect)).strip() + ";")
    return statements


# PUBLIC_INTERFACE
def render_ddl(dialect_name: str = "postgresql") -> str:
    return "\n\n".join(ddl_statements(dialect_name)) + "\n"


if __name__ == "__main__":
    sys.stdout.write(render_ddl(sys.argv[1] if len(sys.argv) > 1 else "postgresql"))
