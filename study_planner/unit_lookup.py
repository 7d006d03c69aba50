import os
import json
import re

import requests
from bs4 import BeautifulSoup

from study_planner.prerequisites import parse_prereq_text
from study_planner.semester import Offering
from study_planner.unit import Unit

CACHE_FILE = "data/unit_cache.json"
HANDBOOK_URL = "https://www.qut.edu.au/study/unit"

# Request headers to avoid being blocked
HEADERS = {'User-Agent': 'Mozilla/5.0'}

OFFERING_PATTERNS = {
    Offering.SEMESTER1: re.compile(r"\bSemester\s*1\b", re.IGNORECASE),
    Offering.SEMESTER2: re.compile(r"\bSemester\s*2\b", re.IGNORECASE),
    Offering.SUMMER: re.compile(r"\bSummer\b", re.IGNORECASE),
}


def load_cache(path=CACHE_FILE):
    if os.path.exists(path):
        with open(path, "r") as f:
            return json.load(f)
    return {}


def save_cache(cache, path=CACHE_FILE):
    folder = os.path.dirname(path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    with open(path, "w") as f:
        json.dump(cache, f, indent=2)


def parse_unit_page(html, code):
    """Pulls credit points, offerings, prerequisites and title for `code` out of a
    handbook page. Returns None if the page doesn't describe that unit."""
    soup = BeautifulSoup(html, "html.parser")
    text = soup.get_text("\n", strip=True)
    if code not in text:
        return None

    cp_match = re.search(r"(\d+)\s*credit\s*points?", text, re.IGNORECASE)
    if not cp_match:
        return None

    title = ""
    heading = soup.find("h1")
    if heading:
        title = heading.get_text(" ", strip=True)
        title = re.sub(rf"^{code}\s*[-:]?\s*", "", title).strip()

    offered_text = text
    availability = soup.find(class_=re.compile("availab", re.IGNORECASE))
    if availability:
        offered_text = availability.get_text(" ", strip=True)
    offerings = {o.name: bool(p.search(offered_text)) for o, p in OFFERING_PATTERNS.items()}

    prereq_match = re.search(r"Pre-?requisites?\s*:?\s*\n?(.+)", text, re.IGNORECASE)
    prerequisites = prereq_match.group(1).strip() if prereq_match else ""

    return {
        "title": title,
        "credit_points": int(cp_match.group(1)),
        "offerings": offerings,
        "prerequisites": prerequisites,
    }


def unit_from_info(code, info):
    offerings = {o: info["offerings"].get(o.name, False) for o in Offering}
    return Unit(code, info["credit_points"], offerings, info.get("title", ""),
                parse_prereq_text(info.get("prerequisites", "")))


def get_unit_from_handbook(code, cache_path=CACHE_FILE):
    cache = load_cache(cache_path)

    if code in cache and cache[code] != "???":
        return cache[code]

    try:
        resp = requests.get(HANDBOOK_URL, params={"unitCode": code}, headers=HEADERS, timeout=10)
        resp.raise_for_status()
        info = parse_unit_page(resp.text, code)
        if info:
            cache[code] = info
            save_cache(cache, cache_path)
            print(f"✅ {code}: {info['credit_points']} cp")
            return info
    except requests.Timeout:
        print(f"[TIMEOUT] {code} took too long to load")
    except requests.RequestException as e:
        print(f"[ERROR] {code}: {e}")

    cache[code] = "???"
    save_cache(cache, cache_path)
    print(f"❌ {code}: ???")
    return None


def fill_missing_units(catalog, codes, cache_path=CACHE_FILE):
    """Looks up every code the catalogue doesn't know; returns the codes still missing."""
    missing = []
    for code in sorted(set(codes)):
        if code in catalog:
            continue
        info = get_unit_from_handbook(code, cache_path)
        if info is None:
            missing.append(code)
            continue
        catalog.add_unit(unit_from_info(code, info))
    return missing
