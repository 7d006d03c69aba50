# === wizard.py ===
from collections import Counter
from itertools import combinations

from study_planner.bounds import bound_units_in_plan, is_feasible
from study_planner.semester import CURRENT_SEMESTER, semester_sequence
from study_planner.study_plan import DEFAULT_MAX_CREDIT_POINTS, last_semester, plan_errors, sort_plan


class SchedulingWizard:
    def __init__(self, catalog, max_credit_points=DEFAULT_MAX_CREDIT_POINTS, current=CURRENT_SEMESTER):
        self.catalog = catalog
        self.max_credit_points = max_credit_points
        self._current = current

    @property
    def current_semester(self):
        return self._current

    def try_to_complete_by(self, target_graduation, plan):
        """
        Yields the units of a legal plan that graduates no later than
        target_graduation, or nothing if there isn't one.

        Units in the current semester or earlier stay where they are; every other
        unit may move to any semester after the current one. Nothing can move into
        the current semester, so a target of the current semester (or earlier)
        yields nothing.
        """
        plan = list(plan)
        if target_graduation <= self.current_semester or not plan:
            return

        duplicates = sorted(code for code, n in Counter(u.code for u in plan).items() if n > 1)
        if duplicates:
            raise ValueError(f"Units planned more than once: {', '.join(duplicates)}")
        for u in plan:
            self.catalog.get(u.code)

        completed_plan = self._complete_by(target_graduation, plan)
        if completed_plan is None:
            return
        yield from completed_plan

    def try_to_improve_schedule(self, plan):
        """Yields plans that each graduate strictly earlier than the one before."""
        plan = list(plan)
        initial_semester = self.current_semester
        target = last_semester(plan).previous()

        while target > initial_semester:
            improved = list(self.try_to_complete_by(target, plan))
            if not improved:
                return
            yield improved
            plan = improved
            target = last_semester(plan).previous()

    def _complete_by(self, target, plan):
        current = self.current_semester
        fixed = [u for u in plan if u.semester <= current]
        movable = {u.code: u for u in plan if u.semester > current}

        if last_semester(plan) <= target and not plan_errors(self.catalog, plan, self.max_credit_points):
            return sort_plan(plan)
        if not movable:
            return None

        first = current.next()
        bounds = bound_units_in_plan(self.catalog, plan, first, target, current)
        if not is_feasible(bounds):
            return None

        semesters = semester_sequence(first, target)
        rules = {code: self.catalog.get(code).prereq for code in movable}
        cps = {u.code: self.catalog.credit_points(u.code) for u in plan}
        dependents = {code: len(self.catalog.dependents(code)) for code in movable}
        failed = set()
        assignment = {}

        def search(idx, remaining, completed, completed_cp):
            if not remaining:
                return True
            if idx == len(semesters):
                return False
            key = (idx, remaining)
            if key in failed:
                return False

            semester = semesters[idx]
            capacity = self.max_credit_points * (len(semesters) - idx)
            if sum(cps[c] for c in remaining) > capacity:
                failed.add(key)
                return False

            candidates = []
            for code in remaining:
                if not bounds[code].contains(semester):
                    continue
                if not self.catalog.get(code).offered_in(semester.offering):
                    continue
                rule = rules[code]
                if rule.strict_satisfied(completed) and rule.credit_points_satisfied(completed_cp):
                    candidates.append(code)

            # units that can't go any later have to go now
            must = [c for c in remaining if bounds[c].upper <= semester]
            if any(c not in candidates for c in must):
                failed.add(key)
                return False

            optional = sorted((c for c in candidates if c not in must),
                              key=lambda c: (bounds[c].upper, -dependents[c], c))
            for chosen in self._selections(must, optional, cps):
                chosen_set = set(chosen)
                if not all(rules[c].concurrent_satisfied(completed, chosen_set) for c in chosen):
                    continue
                for c in chosen:
                    assignment[c] = semester
                if search(idx + 1, remaining - chosen_set, completed | chosen_set,
                          completed_cp + sum(cps[c] for c in chosen)):
                    return True
                for c in chosen:
                    del assignment[c]

            failed.add(key)
            return False

        completed = frozenset(u.code for u in fixed)
        completed_cp = sum(cps[u.code] for u in fixed)
        if not search(0, frozenset(movable), completed, completed_cp):
            return None

        completed_plan = sort_plan(fixed + [u.moved_to(assignment[code]) for code, u in movable.items()])
        # the search never checks the fixed units themselves
        if plan_errors(self.catalog, completed_plan, self.max_credit_points):
            return None
        return completed_plan

    def _selections(self, must, optional, cps):
        """Sets of units to take in one semester: every unit in `must` plus as many
        of `optional` as fit, largest selections first."""
        base_cp = sum(cps[c] for c in must)
        if base_cp > self.max_credit_points:
            return

        most = 0
        room = self.max_credit_points - base_cp
        for cp in sorted(cps[c] for c in optional):
            if cp > room:
                break
            room -= cp
            most += 1

        for size in range(most, -1, -1):
            for combo in combinations(optional, size):
                if base_cp + sum(cps[c] for c in combo) <= self.max_credit_points:
                    yield tuple(must) + combo
