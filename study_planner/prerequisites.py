# === prerequisites.py ===
import re


class PrerequisiteRule:
    def __init__(self):
        self.strict = []      # List[List[str]]: OR groups
        self.concurrent = []  # List[List[str]]
        self.min_credit_points = 0

    def is_empty(self):
        return not self.strict and not self.concurrent and not self.min_credit_points

    def strict_satisfied(self, completed):
        for group in self.strict:
            if not any(unit in completed for unit in group):
                return False
        return True

    def concurrent_satisfied(self, completed, current):
        for group in self.concurrent:
            if not any(unit in completed or unit in current for unit in group):
                return False
        return True

    def credit_points_satisfied(self, completed_credit_points):
        return completed_credit_points >= self.min_credit_points

    def satisfied(self, completed, current, completed_credit_points):
        return (
            self.strict_satisfied(completed)
            and self.concurrent_satisfied(completed, current)
            and self.credit_points_satisfied(completed_credit_points)
        )

    def referenced_units(self):
        return {unit for group in self.strict + self.concurrent for unit in group}

    def __repr__(self):
        return (f"PrerequisiteRule(strict={self.strict}, concurrent={self.concurrent}, "
                f"min_credit_points={self.min_credit_points})")


# Handbook prerequisite text, e.g. "CAB201 and (CAB202 or CAB203)" or
# "Completion of 96 credit points". Words that aren't unit codes, credit
# points, connectives or brackets are ignored.
_TOKEN_RE = re.compile(
    r"(?P<cp>\d+)\s*(?:credit\s*points?|cp)\b"
    r"|(?P<code>\b[A-Z]{3}\d{3}\b)"
    r"|(?P<op>\band\b|\bor\b|&|\|)"
    r"|(?P<paren>[()])",
    re.IGNORECASE,
)


def _tokenize(text):
    tokens = []
    for m in _TOKEN_RE.finditer(text):
        if m.group("cp"):
            tokens.append(("CP", int(m.group("cp"))))
        elif m.group("code"):
            tokens.append(("UNIT", m.group("code").upper()))
        elif m.group("op"):
            op = m.group("op").lower()
            tokens.append(("AND", None) if op in ("and", "&") else ("OR", None))
        else:
            tokens.append((m.group("paren"), None))
    return tokens


class _Parser:
    """Recursive descent over the tokens; results are in conjunctive normal form
    (a list of clauses, each clause a frozenset of atoms)."""

    def __init__(self, tokens):
        self.tokens = tokens
        self.pos = 0

    def peek(self):
        return self.tokens[self.pos][0] if self.pos < len(self.tokens) else None

    def take(self):
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def expr(self):
        left = self.term()
        while self.peek() == "OR":
            self.take()
            right = self.term()
            left = [a | b for a in left for b in right] if left and right else (left or right)
        return left

    def term(self):
        clauses = self.factor()
        while self.peek() == "AND":
            self.take()
            clauses = clauses + self.factor()
        return clauses

    def factor(self):
        kind = self.peek()
        if kind == "(":
            self.take()
            inner = self.expr()
            if self.peek() == ")":
                self.take()
            return inner
        if kind in ("UNIT", "CP"):
            return [frozenset([self.take()])]
        if kind is not None:
            # stray connective or bracket
            self.take()
        return []


def parse_prereq_text(text):
    rule = PrerequisiteRule()
    if not text:
        return rule

    parser = _Parser(_tokenize(text))
    clauses = []
    while parser.peek() is not None:
        start = parser.pos
        clauses += parser.expr()
        if parser.pos == start:
            parser.take()
    for clause in clauses:
        units = sorted(value for kind, value in clause if kind == "UNIT")
        if units:
            # A credit-point alternative inside an OR group is dropped; the unit group stays.
            if units not in rule.strict:
                rule.strict.append(units)
        else:
            rule.min_credit_points = max([rule.min_credit_points] + [value for _, value in clause])
    return rule
