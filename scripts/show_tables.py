import psycopg
from psycopg import sql

from filmorate_api.core.config import settings
from scripts.create_schema import TABLES


def dump(conn: psycopg.Connection, table: str):
    count = conn.execute(
        sql.SQL("SELECT COUNT(*) FROM {}").format(sql.Identifier(table))
    ).fetchone()[0]
    idx = conn.execute(
        "SELECT indexname, indexdef FROM pg_indexes WHERE tablename = %s",
        (table,),
    ).fetchall()
    print(f"\n'{table}': {count} rows")
    for name, definition in idx:
        print(" -", name, ":", definition)


if __name__ == "__main__":
    with psycopg.connect(settings.pg_dsn) as conn:
        for table in TABLES:
            dump(conn, table)
