# === catalog.py ===
from collections import defaultdict

import duckdb

from study_planner.semester import Offering, parse_offering
from study_planner.unit import Unit


class UnitCatalog:
    def __init__(self):
        self.units = {}  # code -> Unit
        self.graph = defaultdict(list)  # prereq -> units that need it

    def __contains__(self, code):
        return code in self.units

    def __len__(self):
        return len(self.units)

    def get(self, code):
        if code not in self.units:
            raise KeyError(f"Unit {code} is not in the catalogue")
        return self.units[code]

    def add_unit(self, unit):
        self.units[unit.code] = unit
        for prereq in unit.prereq.referenced_units():
            if unit.code not in self.graph[prereq]:
                self.graph[prereq].append(unit.code)

    def dependents(self, code):
        return list(self.graph.get(code, []))

    def credit_points(self, code):
        return self.get(code).credit_points

    def load_units(self, path):
        with open(path) as f:
            for line in f:
                parts = line.rstrip("\n").split("\t")
                if len(parts) not in (2, 3):
                    continue
                code, cp_str = parts[0].strip(), parts[1].strip()
                try:
                    credit_points = int(cp_str)
                except ValueError:
                    continue
                title = parts[2].strip() if len(parts) == 3 else ""
                if code not in self.units:
                    self.units[code] = Unit(code, credit_points, title=title)
                else:
                    self.units[code].credit_points = credit_points
                    self.units[code].title = title or self.units[code].title

    def load_offerings(self, path):
        with open(path) as f:
            for line in f:
                parts = line.strip().split("\t")
                if len(parts) != 4:
                    continue
                code, sem1, sem2, summer = parts
                try:
                    flags = [bool(int(v)) for v in (sem1, sem2, summer)]
                except ValueError:
                    continue
                if code not in self.units:
                    self.units[code] = Unit(code, 12, {})
                self.units[code].offerings = dict(zip(
                    (Offering.SEMESTER1, Offering.SEMESTER2, Offering.SUMMER), flags))

    def load_prereqs(self, path):
        with open(path) as f:
            for line in f:
                parts = line.strip().split("\t")
                if len(parts) != 3:
                    continue
                prereq, target, relation = parts
                try:
                    relation = int(relation)
                except ValueError:
                    continue
                if target not in self.units:
                    self.units[target] = Unit(target)
                rule = self.units[target].prereq

                if prereq.upper().startswith("CP:"):
                    rule.min_credit_points = max(rule.min_credit_points, int(prereq[3:]))
                    continue

                group = [p.strip() for p in prereq.split("|") if p.strip()]
                if relation == -1:
                    rule.strict.append(group)
                else:
                    rule.concurrent.append(group)
                for p in group:
                    if target not in self.graph[p]:
                        self.graph[p].append(target)

    def load_all_data(self, units_path, offerings_path, prereq_path):
        self.load_units(units_path)
        self.load_offerings(offerings_path)
        self.load_prereqs(prereq_path)

    def load_duckdb(self, db_path):
        con = duckdb.connect(db_path, read_only=True)
        try:
            for code, credit_points, title in con.execute(
                    "SELECT code, credit_points, title FROM units").fetchall():
                self.units[code] = Unit(code, int(credit_points), title=title or "")

            for code, offering, offered in con.execute(
                    "SELECT code, offering, offered FROM offerings").fetchall():
                if code in self.units:
                    self.units[code].offerings[parse_offering(offering)] = bool(offered)

            rows = con.execute(
                "SELECT code, group_idx, prereq_code, type FROM prerequisites "
                "ORDER BY code, group_idx, member_idx"
            ).fetchall()
        finally:
            con.close()

        groups = defaultdict(list)
        for code, group_idx, prereq_code, ptype in rows:
            groups[(code, group_idx, ptype)].append(prereq_code)

        for (code, _, ptype), members in groups.items():
            if code not in self.units:
                continue
            rule = self.units[code].prereq
            if ptype == 0:
                rule.min_credit_points = max(rule.min_credit_points, int(members[0]))
                continue
            if ptype == -1:
                rule.strict.append(members)
            else:
                rule.concurrent.append(members)
            for p in members:
                if code not in self.graph[p]:
                    self.graph[p].append(code)
