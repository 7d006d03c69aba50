import os
import tempfile
import unittest

from study_planner.catalog import UnitCatalog
from study_planner.prerequisites import PrerequisiteRule
from study_planner.semester import Offering, Semester
from study_planner.study_plan import (
    credit_points_in, first_semester, is_enrollable, is_legal_plan, last_semester, load_plan,
    missing_required_units, plan_errors, save_plan, units_in_semester,
)
from study_planner.unit import Unit, UnitInPlan

S1_2020 = Semester(2020, Offering.SEMESTER1)
S2_2020 = Semester(2020, Offering.SEMESTER2)
S1_2021 = Semester(2021, Offering.SEMESTER1)


def rule(strict=(), concurrent=(), cp=0):
    r = PrerequisiteRule()
    r.strict = [list(g) for g in strict]
    r.concurrent = [list(g) for g in concurrent]
    r.min_credit_points = cp
    return r


def make_catalog():
    semesters_only = {Offering.SEMESTER1: True, Offering.SEMESTER2: True, Offering.SUMMER: False}
    catalog = UnitCatalog()
    catalog.add_unit(Unit("A1", 12, dict(semesters_only)))
    catalog.add_unit(Unit("B1", 12, dict(semesters_only), prereq=rule(strict=[["A1"]])))
    catalog.add_unit(Unit("C1", 12, {Offering.SEMESTER1: True}, prereq=rule(concurrent=[["B1"]])))
    catalog.add_unit(Unit("D1", 12, dict(semesters_only), prereq=rule(cp=24)))
    return catalog


class TestStudyPlan(unittest.TestCase):

    def setUp(self):
        self.catalog = make_catalog()
        self.plan = [
            UnitInPlan("A1", "Core", S1_2020),
            UnitInPlan("B1", "Core", S2_2020),
            UnitInPlan("C1", "Elective", S1_2021),
        ]

    def test_first_and_last_semester(self):
        self.assertEqual(first_semester(self.plan), S1_2020)
        self.assertEqual(last_semester(self.plan), S1_2021)
        self.assertEqual(last_semester(iter(self.plan)), S1_2021)

    def test_empty_plan_has_no_last_semester(self):
        with self.assertRaises(ValueError):
            last_semester([])
        with self.assertRaises(ValueError):
            first_semester([])

    def test_units_in_semester_and_credit_points(self):
        self.assertEqual([u.code for u in units_in_semester(self.plan, S2_2020)], ["B1"])
        self.assertEqual(credit_points_in(self.plan, S2_2020, self.catalog), 12)
        self.assertEqual(credit_points_in(self.plan, Semester(2020, Offering.SUMMER), self.catalog), 0)

    def test_is_enrollable(self):
        self.assertTrue(is_enrollable(self.catalog, "B1", S2_2020, self.plan))
        self.assertFalse(is_enrollable(self.catalog, "B1", S1_2020, self.plan))
        self.assertFalse(is_enrollable(self.catalog, "B1", Semester(2020, Offering.SUMMER), self.plan))
        # concurrent: same semester as B1 is fine, but C1 only runs in semester 1
        self.assertFalse(is_enrollable(self.catalog, "C1", S2_2020, self.plan))
        self.assertTrue(is_enrollable(self.catalog, "C1", S1_2021, self.plan))

    def test_credit_point_prerequisite(self):
        plan = self.plan + [UnitInPlan("D1", "Elective", S2_2020)]
        self.assertFalse(is_enrollable(self.catalog, "D1", S2_2020, plan))
        self.assertTrue(is_enrollable(self.catalog, "D1", S1_2021, plan))

    def test_legal_plan(self):
        self.assertTrue(is_legal_plan(self.catalog, self.plan))
        self.assertEqual(plan_errors(self.catalog, self.plan), [])

    def test_plan_errors(self):
        plan = [
            UnitInPlan("B1", "Core", S1_2020),
            UnitInPlan("A1", "Core", S1_2020),
            UnitInPlan("A1", "Core", S2_2020),
        ]
        errors = plan_errors(self.catalog, plan, max_credit_points=12)
        self.assertIn("A1 is planned 2 times", errors)
        self.assertIn("B1 prerequisites are not met by 2020 Semester1", errors)
        self.assertIn("2020 Semester1 has 24 credit points (max 12)", errors)

    def test_unknown_units_are_reported(self):
        errors = plan_errors(self.catalog, [UnitInPlan("ZZZ999", "Core", S1_2020)])
        self.assertEqual(errors, ["ZZZ999 is not in the catalogue"])

    def test_load_and_save(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "plan.txt")
            save_plan(list(reversed(self.plan)), path)
            with open(path) as f:
                first_line = f.readline()
            self.assertEqual(first_line, "A1\tCore\t2020\tSemester1\n")
            self.assertEqual(load_plan(path), self.plan)

    def test_load_plan_skips_comments(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "plan.txt")
            with open(path, "w") as f:
                f.write("# code\tarea\tyear\toffering\n\nA1\tCore\t2020\tS2\nbad line\n")
            self.assertEqual(load_plan(path), [UnitInPlan("A1", "Core", S2_2020)])

    def test_missing_required_units(self):
        self.assertEqual(missing_required_units(self.plan, ["A1", "X1", "Y1"], {"Y1": ["C1"]}), ["X1"])


if __name__ == "__main__":
    unittest.main()
