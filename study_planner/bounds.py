# === bounds.py ===
from dataclasses import dataclass

from study_planner.semester import CURRENT_SEMESTER, Semester


@dataclass(frozen=True)
class Bound:
    lower: Semester
    upper: Semester

    @property
    def feasible(self):
        return self.lower <= self.upper

    def contains(self, semester):
        return self.lower <= semester <= self.upper


def _offered_on_or_after(unit, semester, limit):
    while semester <= limit:
        if unit.offered_in(semester.offering):
            return semester
        semester = semester.next()
    return limit.next()


def _offered_on_or_before(unit, semester, limit):
    while semester >= limit:
        if unit.offered_in(semester.offering):
            return semester
        semester = semester.previous()
    return limit.previous()


def _in_plan_groups(groups, codes):
    """OR groups restricted to units in the plan; groups with no member in the plan are dropped."""
    restricted = []
    for group in groups:
        members = [c for c in group if c in codes]
        if members:
            restricted.append(members)
    return restricted


def bound_units_in_plan(catalog, plan, first, last, current=CURRENT_SEMESTER):
    """
    Earliest and latest semester each unit of the plan could occupy when the plan
    has to run from `first` to `last`.

    Units in the current semester or earlier keep their own semester. Every other
    unit starts with the whole window (snapped to semesters it is offered in) and
    is narrowed until stable: a unit can't start before its strict prerequisites
    (or before its concurrent ones), and a prerequisite that is the only option
    for some group can't finish after the unit that needs it.

    A unit whose bound ends up with lower > upper can't be placed in the window.
    """
    plan = list(plan)
    codes = {u.code for u in plan}
    fixed = {u.code: u.semester for u in plan if u.semester <= current}
    first = max(first, current.next())

    bounds = {}
    for u in plan:
        if u.code in fixed:
            bounds[u.code] = Bound(u.semester, u.semester)
            continue
        unit = catalog.get(u.code)
        bounds[u.code] = Bound(_offered_on_or_after(unit, first, last),
                               _offered_on_or_before(unit, last, first))

    strict = {}
    concurrent = {}
    for code in codes:
        rule = catalog.get(code).prereq
        strict[code] = _in_plan_groups(rule.strict, codes)
        concurrent[code] = _in_plan_groups(rule.concurrent, codes)

    changed = True
    while changed:
        changed = False
        for code in codes:
            if code in fixed:
                continue
            unit = catalog.get(code)
            bound = bounds[code]

            lower = bound.lower
            for group in strict[code]:
                earliest = min(bounds[c].lower for c in group).next()
                lower = max(lower, earliest)
            for group in concurrent[code]:
                lower = max(lower, min(bounds[c].lower for c in group))

            upper = bound.upper
            for dependent in codes:
                for group in strict[dependent]:
                    if group == [code]:
                        upper = min(upper, bounds[dependent].upper.previous())
                for group in concurrent[dependent]:
                    if group == [code]:
                        upper = min(upper, bounds[dependent].upper)

            lower = _offered_on_or_after(unit, lower, last) if lower <= last else last.next()
            upper = _offered_on_or_before(unit, upper, first) if upper >= first else first.previous()

            if lower != bound.lower or upper != bound.upper:
                bounds[code] = Bound(lower, upper)
                changed = True

    return bounds


def is_feasible(bounds):
    return all(b.feasible for b in bounds.values())
