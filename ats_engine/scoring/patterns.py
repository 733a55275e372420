from __future__ import annotations

import re
from typing import NamedTuple


class NamedPattern(NamedTuple):
    name: str
    regex: re.Pattern[str]


# Thousands-separated numbers first so "1,200,000" is not read as "1".
_NUMBER = r"\d{1,3}(?:,\d{3})+(?:\.\d+)?|\d+(?:\.\d+)?"
# Single-letter magnitudes must not run into a word or hyphen ("$40 t-shirts").
_MAGNITUDE = r"[KMBT](?![\w-])|thousand|million|billion|trillion"
_COUNT_NOUNS = (
    r"users?|customers?|clients?|employees?|members?|students?|patients?|requests?|"
    r"transactions?|records?|projects?|applications?|systems?|features?|servers?|"
    r"stores?|locations?|accounts?|downloads?|visitors?|subscribers?|engineers?|"
    r"developers?|people|partners?|vendors?|products?|reports?|tickets?|services?|"
    r"queries|orders?|leads?|participants?|attendees?"
)
_MONTHS = (
    r"jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|jun(?:e)?|jul(?:y)?|"
    r"aug(?:ust)?|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?"
)

CURRENCY_PATTERNS: tuple[NamedPattern, ...] = (
    NamedPattern(
        "symbol",
        re.compile(rf"\$\s?(?P<amount>{_NUMBER})(?:\s*(?P<suffix>{_MAGNITUDE})\b)?", re.IGNORECASE),
    ),
    NamedPattern(
        "word",
        re.compile(
            rf"\b(?P<amount>{_NUMBER})(?:\s*(?P<suffix>{_MAGNITUDE}))?\s*(?:dollars?|USD)\b",
            re.IGNORECASE,
        ),
    ),
)

PERCENTAGE_PATTERNS: tuple[NamedPattern, ...] = (
    NamedPattern(
        "percent",
        re.compile(r"\b(?P<amount>\d+(?:\.\d+)?)\s*(?:%|percent\b|per\s+cent\b)", re.IGNORECASE),
    ),
)

MULTIPLIER_PATTERNS: tuple[NamedPattern, ...] = (
    NamedPattern("multiplier", re.compile(r"\b(?P<amount>\d+(?:\.\d+)?)[xX]\b")),
)

COUNT_PATTERNS: tuple[NamedPattern, ...] = (
    NamedPattern(
        "noun",
        re.compile(
            rf"\b(?P<amount>{_NUMBER})\s*(?P<suffix>[KMB](?![\w-]))?\+?\s+(?:{_COUNT_NOUNS})\b",
            re.IGNORECASE,
        ),
    ),
    NamedPattern("separated", re.compile(r"\b(?P<amount>\d{1,3}(?:,\d{3})+)\+?")),
    NamedPattern("plus", re.compile(r"\b(?P<amount>\d+)\+")),
)

OTHER_PATTERNS: tuple[NamedPattern, ...] = (
    NamedPattern("team", re.compile(r"\bteams?\s+of\s+(?P<amount>\d+)\+?", re.IGNORECASE)),
    NamedPattern(
        "scale",
        re.compile(
            r"\b(?P<amount>\d+)\+?\s+(?:countries|regions|markets|states|continents|offices)\b",
            re.IGNORECASE,
        ),
    ),
    NamedPattern(
        "time",
        re.compile(
            r"\b(?P<amount>\d+(?:\.\d+)?)\+?\s*(?:hours?|hrs?|days?|weeks?|months?|years?|yrs?|"
            r"minutes?|mins?|seconds?|ms)\b",
            re.IGNORECASE,
        ),
    ),
    NamedPattern(
        "rank",
        re.compile(
            r"(?:\btop\s+|#)(?P<amount>\d+)\b|\b(?P<ordinal>\d+)(?:st|nd|rd|th)\s+(?:place|rank|position)\b",
            re.IGNORECASE,
        ),
    ),
    NamedPattern(
        "delta",
        re.compile(
            r"\b(?:increased|decreased|reduced|improved|grew|saved|cut|boosted|lowered)\b"
            r"[^.;\n]{0,40}?\bby\s+(?P<amount>\d+)",
            re.IGNORECASE,
        ),
    ),
)

# Evaluation order doubles as overlap priority.
QUANTIFICATION_PATTERNS: dict[str, tuple[NamedPattern, ...]] = {
    "currency": CURRENCY_PATTERNS,
    "percentage": PERCENTAGE_PATTERNS,
    "multiplier": MULTIPLIER_PATTERNS,
    "count": COUNT_PATTERNS,
    "other": OTHER_PATTERNS,
}

MAGNITUDE_MULTIPLIERS: dict[str, float] = {
    "k": 1_000.0,
    "thousand": 1_000.0,
    "m": 1_000_000.0,
    "million": 1_000_000.0,
    "b": 1_000_000_000.0,
    "billion": 1_000_000_000.0,
    "t": 1_000_000_000_000.0,
    "trillion": 1_000_000_000_000.0,
}

BULLET_MARKERS: tuple[NamedPattern, ...] = (
    NamedPattern("dash", re.compile(r"^\s*[-–—](?!\d)\s*(?P<body>.+)$")),
    NamedPattern("glyph", re.compile(r"^\s*[•▪▸►○◦◇·‣⁃✦✧◆◈■□●\uf0b7]\s*(?P<body>.+)$")),
    NamedPattern("asterisk", re.compile(r"^\s*\*(?!\*)\s*(?P<body>.+)$")),
    NamedPattern("numbered", re.compile(r"^\s*\d+[.)]\s+(?P<body>.+)$")),
)

EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
PHONE_RE = re.compile(r"\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}|\+\d{1,3}[-.\s]?\d{6,14}")
CITY_STATE_RE = re.compile(r",\s*[A-Z]{2}\b")
CITY_REGION_RE = re.compile(r"\w+,\s*\w+")
URL_RE = re.compile(r"(?:https?://|www\.|linkedin\.com|github\.com)", re.IGNORECASE)
SOCIAL_PREFIX_RE = re.compile(r"^(?:linkedin|github|twitter|portfolio)\b", re.IGNORECASE)
DATE_ONLY_RE = re.compile(
    rf"^(?:(?:{_MONTHS})\.?\s*)?\d{{1,4}}(?:[/\-]\d{{2,4}})?"
    rf"(?:\s*(?:[-–—]|to)\s*(?:(?:{_MONTHS})\.?\s*)?(?:\d{{1,4}}(?:[/\-]\d{{2,4}})?|present|current|now))?$",
    re.IGNORECASE,
)

DATE_FORMAT_PATTERNS: tuple[NamedPattern, ...] = (
    NamedPattern("slash", re.compile(r"\d{1,2}/\d{4}")),
    NamedPattern("month-year", re.compile(r"[A-Za-z]+\s+\d{4}")),
    NamedPattern("year-range", re.compile(r"\d{4}\s*[-–]\s*\d{4}")),
    NamedPattern("year", re.compile(r"^\d{4}$")),
)

SECTION_SYNONYMS: dict[str, str] = {
    "summary": "summary",
    "professional summary": "summary",
    "career summary": "summary",
    "objective": "summary",
    "career objective": "summary",
    "profile": "summary",
    "professional profile": "summary",
    "about me": "summary",
    "skills": "skills",
    "technical skills": "skills",
    "core skills": "skills",
    "key skills": "skills",
    "core competencies": "skills",
    "skills & technologies": "skills",
    "technologies": "skills",
    "experience": "experience",
    "work experience": "experience",
    "professional experience": "experience",
    "relevant experience": "experience",
    "employment": "experience",
    "employment history": "experience",
    "work history": "experience",
    "career history": "experience",
    "education": "education",
    "academic background": "education",
    "education & training": "education",
    "projects": "projects",
    "project": "projects",
    "personal projects": "projects",
    "academic projects": "projects",
    "technical projects": "projects",
    "certifications": "certifications",
    "certification": "certifications",
    "certificates": "certifications",
    "licenses & certifications": "certifications",
    "licenses and certifications": "certifications",
}

WORD_RE = re.compile(r"[a-z]+")
WHITESPACE_RE = re.compile(r"\s+")
