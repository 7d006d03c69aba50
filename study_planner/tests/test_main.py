import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest import mock

from study_planner import main

DATA_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", "data"))
CONFIG = os.path.join(DATA_DIR, "plan_config_in01.json")


class TestMain(unittest.TestCase):

    def run_main(self, answer, config=CONFIG):
        out = io.StringIO()
        with mock.patch("builtins.input", return_value=answer), redirect_stdout(out):
            code = main.main([config])
        return code, out.getvalue()

    def test_improve_sample_plan(self):
        code, output = self.run_main("")
        self.assertEqual(code, 0)
        self.assertIn("✅ Improvement 1: graduates 2021 Semester2", output)
        self.assertNotIn("Improvement 2", output)
        self.assertIn("📅 Best Study Plan:", output)

    def test_complete_sample_plan_by_target(self):
        code, output = self.run_main("2021 S2")
        self.assertEqual(code, 0)
        self.assertIn("✅ Plan graduating by 2021 Semester2:", output)

    def test_target_too_early(self):
        code, output = self.run_main("2021 Semester1")
        self.assertEqual(code, 1)
        self.assertIn("❌ No plan graduates by 2021 Semester1.", output)

    def test_malformed_target(self):
        code, output = self.run_main("someday")
        self.assertEqual(code, 1)
        self.assertIn("❌ Not a semester: 'someday'", output)

    def test_improve_empty_plan(self):
        with tempfile.TemporaryDirectory() as tmp:
            plan_path = os.path.join(tmp, "plan.txt")
            open(plan_path, "w").close()
            config_path = os.path.join(tmp, "config.json")
            with open(config_path, "w") as f:
                json.dump({
                    "course": "IN01",
                    "data_paths": {
                        "units": os.path.join(DATA_DIR, "units_in01.txt"),
                        "offerings": os.path.join(DATA_DIR, "offerings_in01.txt"),
                        "prereqs": os.path.join(DATA_DIR, "prerequisites_in01.txt"),
                    },
                    "plan": plan_path,
                }, f)
            code, output = self.run_main("", config_path)

        self.assertEqual(code, 1)
        self.assertIn("❌ Study plan is empty", output)


if __name__ == "__main__":
    unittest.main()
