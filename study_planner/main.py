# === main.py ===
import sys

from study_planner.config import load_catalog, load_plan_config
from study_planner.semester import parse_semester, semester_sequence
from study_planner.study_plan import (
    credit_points_in, first_semester, last_semester, load_plan, missing_required_units, plan_errors,
    units_in_semester,
)
from study_planner.unit_lookup import fill_missing_units
from study_planner.wizard import SchedulingWizard


def print_plan(plan, catalog):
    if not plan:
        print("  (empty plan)")
        return
    for semester in semester_sequence(first_semester(plan), last_semester(plan)):
        units = units_in_semester(plan, semester)
        if not units:
            continue
        print(f"{semester}:")
        for u in sorted(units, key=lambda u: u.code):
            print(f"  {u.code} [{u.study_area}] ({catalog.credit_points(u.code)} cp)")
        print(f"  Total: {credit_points_in(plan, semester, catalog)} cp")
        print()


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    config_path = argv[0] if argv else "data/plan_config_in01.json"
    config = load_plan_config(config_path)

    catalog = load_catalog(config)
    plan = load_plan(config["plan"])
    print(f"\n=== {config['course'] or config_path} ===")

    if config["lookup_missing_units"]:
        still_missing = fill_missing_units(catalog, [u.code for u in plan])
        if still_missing:
            print(f"\n⚠️ Warning: Units not found in the handbook: {still_missing}\n")
            return 1

    wizard = SchedulingWizard(catalog, max_credit_points=config["max_credit_points"])

    print(f"\n📅 Current Study Plan (now: {wizard.current_semester}):\n")
    print_plan(plan, catalog)

    for error in plan_errors(catalog, plan, config["max_credit_points"]):
        print(f"⚠️ {error}")

    missing = missing_required_units(plan, config["required_units"], config["required_unit_equivalents"])
    if missing:
        print(f"\n⚠️ Warning: Required units not planned: {missing}\n")

    user_input = input("📘 Enter target graduation semester (e.g. 2022 Semester2), "
                       "or leave blank to improve the plan:\n> ")

    if user_input.strip():
        try:
            target = parse_semester(user_input)
        except ValueError as e:
            print(f"\n❌ {e}")
            return 1
        completed = list(wizard.try_to_complete_by(target, plan))
        if not completed:
            print(f"\n❌ No plan graduates by {target}.")
            return 1
        print(f"\n✅ Plan graduating by {target}:\n")
        print_plan(completed, catalog)
        return 0

    best = None
    try:
        for i, improved in enumerate(wizard.try_to_improve_schedule(plan), 1):
            print(f"✅ Improvement {i}: graduates {last_semester(improved)}")
            best = improved
    except ValueError as e:
        print(f"\n❌ {e}")
        return 1

    if best is None:
        print(f"\n⚠️ Couldn't improve on {last_semester(plan)}.")
        return 0

    print("\n📅 Best Study Plan:\n")
    print_plan(best, catalog)
    return 0


if __name__ == "__main__":
    sys.exit(main())
