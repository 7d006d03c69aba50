# === config.py ===
import json
import os

from study_planner.catalog import UnitCatalog
from study_planner.study_plan import DEFAULT_MAX_CREDIT_POINTS

DEFAULTS = {
    "course": "",
    "data_paths": {},
    "plan": None,
    "max_credit_points": DEFAULT_MAX_CREDIT_POINTS,
    "required_units": [],
    "required_unit_equivalents": {},
    "lookup_missing_units": False,
}


def load_plan_config(path):
    """Reads a course's JSON config; keys it leaves out take the defaults above.
    Relative data paths are resolved against the config file's folder."""
    if not os.path.exists(path):
        raise FileNotFoundError(f"Config not found: {path}")

    with open(path) as f:
        raw = json.load(f)

    config = {**DEFAULTS, **raw}
    base_dir = os.path.dirname(os.path.abspath(path))

    def resolve(p):
        return p if p is None or os.path.isabs(p) else os.path.join(base_dir, p)

    config["data_paths"] = {key: resolve(p) for key, p in (raw.get("data_paths") or {}).items()}
    config["plan"] = resolve(config["plan"])
    config["max_credit_points"] = int(config["max_credit_points"])
    return config


def load_catalog(config):
    """Builds the unit catalogue from whichever source the config names."""
    catalog = UnitCatalog()
    paths = config["data_paths"]
    if paths.get("duckdb") and os.path.exists(paths["duckdb"]):
        catalog.load_duckdb(paths["duckdb"])
        return catalog

    for key in ("units", "offerings", "prereqs"):
        if not paths.get(key) or not os.path.exists(paths[key]):
            raise FileNotFoundError(f"Missing {key} file for {config['course'] or 'course'}: {paths.get(key)}")
    catalog.load_all_data(paths["units"], paths["offerings"], paths["prereqs"])
    return catalog
