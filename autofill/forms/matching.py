"""Fuzzy matching of extracted fields against known constant keys.

Each field contributes up to four candidate terms (label, name, placeholder,
id). Each known key is normalized by lower-casing it and turning underscores
into spaces, so ``first_name`` compares as ``first name``. Every
``(term, key)`` pair is scored by the first rule that applies:

1. identical strings score ``1.0``;
2. one string containing the other scores ``0.9``;
3. shared whitespace-separated tokens score
   ``0.7 * shared / max(term tokens, key tokens)``;
4. otherwise the character overlap scores
   ``0.5 * distinct term chars found in key / max(len(term), len(key))``.

A field's best pair is accepted only when its score is strictly greater than
the threshold. Ties keep the first key seen, then the first term.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional, Sequence

from autofill.config import DEFAULT_MATCH_THRESHOLD
from autofill.models import FieldDescriptor, FieldMatch, FillValue, MatchResult

logger = logging.getLogger(__name__)

EXACT_SCORE = 1.0
SUBSTRING_SCORE = 0.9
TOKEN_WEIGHT = 0.7
CHARACTER_WEIGHT = 0.5


def normalize_key(key: str) -> str:
    return key.lower().replace("_", " ")


def similarity_score(term: str, key: str) -> float:
    """Return the 0-1 similarity between a lower-cased term and a normalized key."""

    if term == key:
        return EXACT_SCORE
    if key in term or term in key:
        return SUBSTRING_SCORE

    term_tokens = term.split()
    key_tokens = key.split()
    shared = set(term_tokens) & set(key_tokens)
    if shared:
        return TOKEN_WEIGHT * (len(shared) / max(len(set(term_tokens)), len(set(key_tokens))))

    longest = max(len(term), len(key))
    if not longest:
        return 0.0
    common = set(term) & set(key)
    return CHARACTER_WEIGHT * (len(common) / longest)


def best_match(
    field: FieldDescriptor,
    known: Mapping[str, FillValue],
    threshold: float = DEFAULT_MATCH_THRESHOLD,
) -> Optional[FieldMatch]:
    """Return the winning ``(term, key)`` pair for ``field`` or ``None``.

    Keys that normalize to blank (``""``, ``"___"``) are ignored.
    """

    terms = field.terms()
    if not terms:
        return None

    winner: Optional[FieldMatch] = None
    best_score = 0.0
    for key, value in known.items():
        normalized = normalize_key(key)
        if not normalized.strip():
            continue
        for term in terms:
            score = similarity_score(term, normalized)
            if score > best_score and score > threshold:
                best_score = score
                winner = FieldMatch(field_id=field.id, key=key, term=term, score=score, value=value)
    return winner


def explain_matches(
    fields: Sequence[FieldDescriptor],
    known: Mapping[str, FillValue],
    threshold: float = DEFAULT_MATCH_THRESHOLD,
) -> List[FieldMatch]:
    """Return the accepted :class:`FieldMatch` for every field that has one."""

    matches: List[FieldMatch] = []
    for field in fields:
        match = best_match(field, known, threshold)
        if match is not None:
            matches.append(match)
    return matches


def match_fields_to_constants(
    fields: Sequence[FieldDescriptor],
    known: Mapping[str, FillValue],
    threshold: Optional[float] = None,
) -> MatchResult:
    """Map each matched field id to the value of its winning key.

    Fields without a match above ``threshold`` are simply absent.
    """

    if threshold is None:
        threshold = DEFAULT_MATCH_THRESHOLD

    result: Dict[str, FillValue] = {}
    for match in explain_matches(fields, known, threshold):
        result[match.field_id] = match.value
        logger.debug(f"Matched {match.field_id!r} to {match.key!r} via {match.term!r} (score: {match.score:.2f})")
    logger.info(f"Matched {len(result)}/{len(fields)} fields to constants")
    return result


__all__ = [
    "EXACT_SCORE",
    "SUBSTRING_SCORE",
    "normalize_key",
    "similarity_score",
    "best_match",
    "explain_matches",
    "match_fields_to_constants",
]
