import os
import sys

import duckdb

from study_planner.config import load_catalog, load_plan_config
from study_planner.semester import Offering


def build_duckdb(catalog, db_path):
    """Recreates db_path with units, offerings and prerequisites tables.
    Prerequisite type is -1 for strict, 1 for concurrent and 0 for a
    credit-point minimum (prereq_code then holds the number)."""
    if os.path.exists(db_path):
        os.remove(db_path)

    con = duckdb.connect(db_path)
    try:
        con.execute("CREATE TABLE units (code TEXT PRIMARY KEY, credit_points INT, title TEXT)")
        con.execute("CREATE TABLE offerings (code TEXT, offering TEXT, offered BOOLEAN)")
        con.execute("""
        CREATE TABLE prerequisites (
          code TEXT,
          group_idx INT,    -- index of the OR group within the unit's rule
          member_idx INT,   -- position within the OR group
          prereq_code TEXT,
          type INT
        )
        """)

        for code in sorted(catalog.units):
            unit = catalog.units[code]
            con.execute("INSERT INTO units VALUES (?, ?, ?)", (code, unit.credit_points, unit.title))

            for offering in Offering:
                con.execute("INSERT INTO offerings VALUES (?, ?, ?)",
                            (code, str(offering), unit.offered_in(offering)))

            rule = unit.prereq
            group_idx = 0
            for ptype, groups in ((-1, rule.strict), (1, rule.concurrent)):
                for group in groups:
                    for member_idx, prereq in enumerate(group):
                        con.execute("INSERT INTO prerequisites VALUES (?, ?, ?, ?, ?)",
                                    (code, group_idx, member_idx, prereq, ptype))
                    group_idx += 1
            if rule.min_credit_points:
                con.execute("INSERT INTO prerequisites VALUES (?, ?, ?, ?, ?)",
                            (code, group_idx, 0, str(rule.min_credit_points), 0))
    finally:
        con.close()


def main():
    config_path = sys.argv[1] if len(sys.argv) > 1 else "data/plan_config_in01.json"
    config = load_plan_config(config_path)
    db_path = config["data_paths"].get("duckdb") or "data/units.duckdb"

    # always rebuild from the text files
    config["data_paths"] = {k: v for k, v in config["data_paths"].items() if k != "duckdb"}
    catalog = load_catalog(config)

    build_duckdb(catalog, db_path)
    print(f"✅ DuckDB built with {len(catalog)} units at {db_path}")


if __name__ == "__main__":
    main()
