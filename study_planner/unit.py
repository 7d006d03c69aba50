# === unit.py ===
from dataclasses import dataclass

from study_planner.prerequisites import PrerequisiteRule
from study_planner.semester import Offering, Semester


class Unit:
    def __init__(self, code, credit_points=12, offerings=None, title="", prereq=None):
        self.code = code
        self.credit_points = credit_points
        self.offerings = offerings if offerings is not None else {o: True for o in Offering}  # {Offering: bool}
        self.title = title
        self.prereq = prereq if prereq is not None else PrerequisiteRule()

    def offered_in(self, offering):
        return self.offerings.get(offering, False)

    def __repr__(self):
        return f"Unit({self.code!r}, {self.credit_points})"


@dataclass(frozen=True)
class UnitInPlan:
    code: str
    study_area: str
    semester: Semester

    def moved_to(self, semester):
        return UnitInPlan(self.code, self.study_area, semester)
