from __future__ import annotations

import string

from pydantic import BaseModel, ConfigDict, model_validator

from ats_engine.schemas.scoring import VerbStrength

from .patterns import WHITESPACE_RE, WORD_RE

STRONG_ACTION_VERBS: tuple[str, ...] = (
    # leadership
    "led", "directed", "managed", "supervised", "headed", "oversaw",
    "coordinated", "orchestrated", "spearheaded", "championed",
    # achievement
    "achieved", "accomplished", "delivered", "exceeded", "surpassed",
    "attained", "earned", "won", "secured",
    # growth
    "grew", "increased", "expanded", "scaled", "accelerated",
    "boosted", "elevated", "enhanced", "maximized", "optimized",
    # creation
    "built", "created", "developed", "designed", "established",
    "founded", "launched", "initiated", "pioneered", "introduced",
    # improvement
    "improved", "streamlined", "transformed", "revamped", "modernized",
    "upgraded", "refined", "restructured", "reengineered",
    # problem solving
    "solved", "resolved", "fixed", "addressed", "eliminated",
    "reduced", "minimized", "prevented", "mitigated",
    # impact
    "drove", "generated", "produced", "saved", "cut",
    "recovered", "captured", "negotiated", "influenced",
    # technical
    "implemented", "architected", "engineered", "automated",
    "integrated", "deployed", "migrated", "configured",
)

MODERATE_ACTION_VERBS: tuple[str, ...] = (
    # collaboration, acceptable for junior and co-op roles
    "contributed", "collaborated", "partnered", "facilitated",
    "supported", "assisted", "participated", "engaged",
    # standard professional
    "maintained", "handled", "processed", "performed",
    "conducted", "completed", "prepared", "organized", "documented",
    "wrote", "tested", "reviewed", "updated", "modified",
)

WEAK_ACTION_VERBS: tuple[str, ...] = (
    "helped", "worked", "was", "had", "did", "made",
    "dealt", "used", "involved", "responsible",
    "tried", "attempted", "learned", "studied", "observed",
    "watched", "saw", "knew", "understood", "familiarized",
)

WEAK_VERB_PHRASES: tuple[str, ...] = (
    "was responsible for",
    "was involved in",
    "responsible for",
    "dealt with",
    "tasked with",
    "in charge of",
    "looked after",
    "worked on",
    "helped with",
)


_EDGE_PUNCTUATION = string.punctuation + "\u201c\u201d\u2018\u2019"


def _normalize(text: str) -> str:
    return WHITESPACE_RE.sub(" ", (text or "").strip().lower())


def first_word(text: str) -> str:
    """Leading token of ``text`` lowercased, with surrounding punctuation stripped."""
    normalized = _normalize(text)
    if not normalized:
        return ""
    token = normalized.split(" ", 1)[0].strip(_EDGE_PUNCTUATION)
    match = WORD_RE.match(token)
    return match.group(0) if match else ""


class VerbLexicon(BaseModel):
    """Immutable verb lists used by the classifier.

    Single-word lists must be pairwise disjoint so every word has exactly one
    strength. Weak phrases may start with a weak word ("worked on").
    """

    model_config = ConfigDict(frozen=True)

    strong: frozenset[str] = frozenset(STRONG_ACTION_VERBS)
    moderate: frozenset[str] = frozenset(MODERATE_ACTION_VERBS)
    weak: frozenset[str] = frozenset(WEAK_ACTION_VERBS)
    weak_phrases: tuple[str, ...] = WEAK_VERB_PHRASES

    @model_validator(mode="after")
    def _check_disjoint(self) -> "VerbLexicon":
        overlaps = {
            "strong/weak": self.strong & self.weak,
            "strong/moderate": self.strong & self.moderate,
            "moderate/weak": self.moderate & self.weak,
        }
        for label, shared in overlaps.items():
            if shared:
                raise ValueError(f"verb lists overlap ({label}): {', '.join(sorted(shared))}")
        return self


DEFAULT_LEXICON = VerbLexicon()


def classify_verb(phrase: str, lexicon: VerbLexicon = DEFAULT_LEXICON) -> VerbStrength:
    normalized = _normalize(phrase)
    if not normalized:
        return "unknown"

    for weak_phrase in lexicon.weak_phrases:
        if normalized == weak_phrase or normalized.startswith(weak_phrase + " "):
            return "weak"

    word = first_word(normalized)
    if not word:
        return "unknown"
    if word in lexicon.weak:
        return "weak"
    if word in lexicon.strong:
        return "strong"
    if word in lexicon.moderate:
        return "moderate"
    return "unknown"


def classify_leading_verb(bullet: str, lexicon: VerbLexicon = DEFAULT_LEXICON) -> VerbStrength:
    return classify_verb(bullet, lexicon)
