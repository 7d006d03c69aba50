# === semester.py ===
import re
from dataclasses import dataclass
from enum import Enum


class Offering(Enum):
    SEMESTER1 = 1
    SEMESTER2 = 2
    SUMMER = 3

    def __str__(self):
        return {"SEMESTER1": "Semester1", "SEMESTER2": "Semester2", "SUMMER": "Summer"}[self.name]


OFFERING_ORDER = [Offering.SEMESTER1, Offering.SEMESTER2, Offering.SUMMER]

_OFFERING_ALIASES = {
    "1": Offering.SEMESTER1,
    "s1": Offering.SEMESTER1,
    "sem1": Offering.SEMESTER1,
    "semester1": Offering.SEMESTER1,
    "2": Offering.SEMESTER2,
    "s2": Offering.SEMESTER2,
    "sem2": Offering.SEMESTER2,
    "semester2": Offering.SEMESTER2,
    "3": Offering.SUMMER,
    "su": Offering.SUMMER,
    "summer": Offering.SUMMER,
}


def parse_offering(text):
    key = re.sub(r"[\s_\-]", "", str(text)).lower()
    if key not in _OFFERING_ALIASES:
        raise ValueError(f"Unknown offering: {text!r}")
    return _OFFERING_ALIASES[key]


@dataclass(frozen=True)
class Semester:
    """
    One academic term: a four digit year and the offering within that year.
    Ordering is by year, then Semester1 < Semester2 < Summer.
    """
    year: int
    offering: Offering

    def __lt__(self, other):
        if not isinstance(other, Semester):
            return NotImplemented
        return self._key() < other._key()

    def __le__(self, other):
        if not isinstance(other, Semester):
            return NotImplemented
        return self._key() <= other._key()

    def __gt__(self, other):
        if not isinstance(other, Semester):
            return NotImplemented
        return self._key() > other._key()

    def __ge__(self, other):
        if not isinstance(other, Semester):
            return NotImplemented
        return self._key() >= other._key()

    def _key(self):
        return (self.year, self.offering.value)

    def next(self):
        idx = OFFERING_ORDER.index(self.offering)
        if idx == len(OFFERING_ORDER) - 1:
            return Semester(self.year + 1, OFFERING_ORDER[0])
        return Semester(self.year, OFFERING_ORDER[idx + 1])

    def previous(self):
        idx = OFFERING_ORDER.index(self.offering)
        if idx == 0:
            return Semester(self.year - 1, OFFERING_ORDER[-1])
        return Semester(self.year, OFFERING_ORDER[idx - 1])

    def __str__(self):
        return f"{self.year} {self.offering}"


# Do not change
CURRENT_SEMESTER = Semester(2020, Offering.SEMESTER1)


def parse_semester(text):
    """Parses '2020 Semester1', '2020 S2', '2021 summer' or '2020-1'."""
    match = re.match(r"^\s*(\d{4})[\s/\-_]*(.+?)\s*$", str(text))
    if not match:
        raise ValueError(f"Not a semester: {text!r}")
    return Semester(int(match.group(1)), parse_offering(match.group(2)))


def semester_sequence(first, last):
    """Every semester from first to last inclusive (empty when first > last)."""
    semesters = []
    current = first
    while current <= last:
        semesters.append(current)
        current = current.next()
    return semesters
