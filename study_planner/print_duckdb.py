import os
import sys

import duckdb

TABLES = ["units", "offerings", "prerequisites"]


def print_tables(db_path, limit=1000):
    if not os.path.exists(db_path):
        raise FileNotFoundError(f"{db_path} not found. Run build_duckdb first to create it.")

    con = duckdb.connect(db_path, read_only=True)
    try:
        for table in TABLES:
            print(f"\n=== {table.upper()} ===")
            try:
                results = con.execute(f"SELECT * FROM {table} LIMIT {int(limit)}").fetchall()
                for row in results:
                    print(row)
            except duckdb.Error as e:
                print(f"Error querying {table}: {e}")
    finally:
        con.close()


if __name__ == "__main__":
    print_tables(sys.argv[1] if len(sys.argv) > 1 else "data/units.duckdb")
