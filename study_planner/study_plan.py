# === study_plan.py ===
from collections import Counter

from study_planner.semester import parse_offering, Semester, semester_sequence
from study_planner.unit import UnitInPlan

DEFAULT_MAX_CREDIT_POINTS = 48


def first_semester(plan):
    plan = list(plan)
    if not plan:
        raise ValueError("Study plan is empty")
    return min(u.semester for u in plan)


def last_semester(plan):
    plan = list(plan)
    if not plan:
        raise ValueError("Study plan is empty")
    return max(u.semester for u in plan)


def units_in_semester(plan, semester):
    return [u for u in plan if u.semester == semester]


def credit_points_in(plan, semester, catalog):
    return sum(catalog.credit_points(u.code) for u in plan if u.semester == semester)


def is_enrollable(catalog, code, semester, plan):
    """True when the unit is offered in that semester and the rest of the plan
    satisfies its prerequisites if it were taken then."""
    unit = catalog.get(code)
    if not unit.offered_in(semester.offering):
        return False

    completed = set()
    current = set()
    completed_cp = 0
    for other in plan:
        if other.code == code:
            continue
        if other.semester < semester:
            completed.add(other.code)
            completed_cp += catalog.credit_points(other.code)
        elif other.semester == semester:
            current.add(other.code)

    return unit.prereq.satisfied(completed, current, completed_cp)


def is_legal_in(catalog, unit_in_plan, plan):
    return is_enrollable(catalog, unit_in_plan.code, unit_in_plan.semester, plan)


def plan_errors(catalog, plan, max_credit_points=DEFAULT_MAX_CREDIT_POINTS):
    plan = list(plan)
    errors = []

    counts = Counter(u.code for u in plan)
    for code, count in sorted(counts.items()):
        if count > 1:
            errors.append(f"{code} is planned {count} times")

    unknown = sorted({u.code for u in plan if u.code not in catalog})
    for code in unknown:
        errors.append(f"{code} is not in the catalogue")
    if unknown:
        return errors

    for u in plan:
        if not catalog.get(u.code).offered_in(u.semester.offering):
            errors.append(f"{u.code} is not offered in {u.semester.offering}")
        elif not is_legal_in(catalog, u, plan):
            errors.append(f"{u.code} prerequisites are not met by {u.semester}")

    if plan:
        for semester in semester_sequence(first_semester(plan), last_semester(plan)):
            load = credit_points_in(plan, semester, catalog)
            if load > max_credit_points:
                errors.append(f"{semester} has {load} credit points (max {max_credit_points})")

    return errors


def is_legal_plan(catalog, plan, max_credit_points=DEFAULT_MAX_CREDIT_POINTS):
    return not plan_errors(catalog, plan, max_credit_points)


def sort_plan(plan):
    return sorted(plan, key=lambda u: (u.semester.year, u.semester.offering.value, u.code))


def load_plan(path):
    """Reads code<TAB>study_area<TAB>year<TAB>offering lines into a study plan."""
    plan = []
    with open(path) as f:
        for line in f:
            if not line.strip() or line.startswith("#"):
                continue
            parts = line.rstrip("\n").split("\t")
            if len(parts) != 4:
                continue
            code, study_area, year, offering = (p.strip() for p in parts)
            plan.append(UnitInPlan(code, study_area, Semester(int(year), parse_offering(offering))))
    return plan


def save_plan(plan, path):
    with open(path, "w") as f:
        for u in sort_plan(plan):
            f.write(f"{u.code}\t{u.study_area}\t{u.semester.year}\t{u.semester.offering}\n")


def missing_required_units(plan, required, equivalents=None):
    planned = {u.code for u in plan}
    equivalents = equivalents or {}
    missing = set()

    for code in required:
        if code in planned:
            continue
        # If any equivalent is planned, treat it as satisfied
        if any(eq in planned for eq in equivalents.get(code, [])):
            continue
        missing.add(code)

    return sorted(missing)
