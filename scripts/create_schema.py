import argparse

import psycopg

from filmorate_api.core.config import settings
from filmorate_api.db.schema import DDL, SEED_GENRES, SEED_MPA
from filmorate_api.services.repositories.reference_repo import (
    GENRES,
    MPA_RATINGS,
)

TABLES = ("friends", "film_likes", "film_genre",
          "users", "films", "genres", "mpa_ratings")


def main():
    parser = argparse.ArgumentParser(
        description="Create Filmorate tables and seed reference data.")
    parser.add_argument("--drop", action="store_true",
                        help="drop all tables first (destroys data)")
    args = parser.parse_args()

    print("Using DSN:", settings.pg_dsn)
    with psycopg.connect(settings.pg_dsn) as conn:
        if args.drop:
            conn.execute(f"DROP TABLE IF EXISTS {', '.join(TABLES)} CASCADE")
            print("Tables dropped.")
        conn.execute(DDL)
        with conn.cursor() as cur:
            cur.executemany(SEED_MPA, [(m.id, m.name) for m in MPA_RATINGS])
            cur.executemany(SEED_GENRES, [(g.id, g.name) for g in GENRES])
        conn.commit()

    print("Schema ensured.")


if __name__ == "__main__":
    main()
