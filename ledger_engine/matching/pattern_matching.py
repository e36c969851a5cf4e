"""
Generic Pattern Matching for Transaction Classification.

Provides the reusable matching primitives every detector is built on:
substring keyword lists, precompiled regex tables, per-field match modes
and fuzzy similarity for near-duplicate payee text.
"""

import logging
import re
from typing import Dict, List, Optional, Pattern, Sequence, Tuple

from rapidfuzz import fuzz, process

from .preprocess import normalize_text

logger = logging.getLogger(__name__)

# Match modes supported by match_value
MATCH_CONTAINS = "contains"
MATCH_STARTS_WITH = "startsWith"
MATCH_ENDS_WITH = "endsWith"
MATCH_REGEX = "regex"

MATCH_MODES = (MATCH_CONTAINS, MATCH_STARTS_WITH, MATCH_ENDS_WITH, MATCH_REGEX)


def compile_pattern(pattern: str) -> Optional[Pattern]:
    """
    Compile a case-insensitive regex, returning None if it is malformed.

    Args:
        pattern: Regex pattern string

    Returns:
        Compiled pattern, or None when the pattern does not compile
    """
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as exc:
        logger.warning("Rejected invalid regex %r: %s", pattern, exc)
        return None


def compile_named_patterns(
    patterns: Sequence[Tuple[str, str]]
) -> List[Tuple[Pattern, str]]:
    """
    Compile an ordered (regex, name) table once.

    Malformed entries are dropped with a warning so a bad table entry can
    never fail a classification call later.

    Args:
        patterns: Ordered (regex, display name) pairs

    Returns:
        Ordered list of (compiled regex, display name)
    """
    compiled = []
    for pattern, name in patterns:
        regex = compile_pattern(pattern)
        if regex is not None:
            compiled.append((regex, name))
    return compiled


def match_named_patterns(
    text: str,
    patterns: Sequence[Tuple[Pattern, str]]
) -> Optional[str]:
    """
    Return the display name of the first compiled pattern found in text.

    Example:
        >>> table = compile_named_patterns([(r"payroll", "Payroll")])
        >>> match_named_patterns("PAYROLL DEPOSIT", table)
        "Payroll"
    """
    if not text:
        return None
    for regex, name in patterns:
        if regex.search(text):
            return name
    return None


def match_keywords(text: str, keywords: Sequence[str]) -> Optional[str]:
    """
    Match text against a list of keywords (case-insensitive substring).

    Args:
        text: Text to search
        keywords: Keyword strings

    Returns:
        The first keyword contained in text, or None
    """
    normalized = normalize_text(text)
    if not normalized:
        return None
    for keyword in keywords:
        if keyword.lower() in normalized:
            return keyword
    return None


def match_value(
    value: Optional[str],
    pattern: str,
    match_type: str = MATCH_CONTAINS,
    compiled: Optional[Pattern] = None,
) -> bool:
    """
    Match a single field value using one of the supported match modes.

    Args:
        value: Field value (description, payee or memo)
        pattern: Pattern text
        match_type: One of contains / startsWith / endsWith / regex
        compiled: Precompiled regex for regex mode (compiled on demand otherwise)

    Returns:
        True if the value matches; False for unknown modes or invalid regexes
    """
    raw_value = value or ""
    lowered = raw_value.lower()
    lowered_pattern = (pattern or "").lower()

    if match_type == MATCH_CONTAINS:
        return lowered_pattern in lowered
    if match_type == MATCH_STARTS_WITH:
        return lowered.startswith(lowered_pattern)
    if match_type == MATCH_ENDS_WITH:
        return lowered.endswith(lowered_pattern)
    if match_type == MATCH_REGEX:
        regex = compiled if compiled is not None else compile_pattern(pattern)
        if regex is None:
            return False
        return regex.search(raw_value) is not None
    return False


def fuzzy_best_match(
    text: str,
    candidates: Sequence[str],
    threshold: int = 90,
) -> Optional[Tuple[str, float, int]]:
    """
    Find the candidate most similar to text using rapidfuzz.

    Comparison is done on normalized text with fuzz.ratio so that short
    payee strings do not match every longer string containing them.

    Args:
        text: Text to compare
        candidates: Candidate strings
        threshold: Minimum similarity score (0-100)

    Returns:
        Tuple of (candidate, score, index) or None
    """
    normalized = normalize_text(text)
    if not normalized or not candidates:
        return None

    result = process.extractOne(
        normalized,
        list(candidates),
        scorer=fuzz.ratio,
        processor=normalize_text,
        score_cutoff=threshold,
    )
    if result is None:
        return None

    candidate, score, index = result
    return (candidate, score, index)


def compile_keyword(keyword: str, whole_word_max_length: int = 0) -> Pattern:
    """
    Compile a plain keyword into a case-insensitive substring regex.

    Keywords match anywhere in the text by default, so "cafe" finds
    "STARCAFE". Passing whole_word_max_length makes keywords up to that
    length match as whole words only.

    Args:
        keyword: Keyword text
        whole_word_max_length: Keywords up to this length need word boundaries (0 for none)

    Returns:
        Compiled pattern
    """
    escaped = re.escape(keyword.lower())
    if len(keyword) <= whole_word_max_length:
        escaped = r"(?<![a-z0-9])" + escaped + r"(?![a-z0-9])"
    return re.compile(escaped, re.IGNORECASE)


def compile_keyword_table(
    table: Dict[str, Sequence[str]],
    whole_word_max_length: int = 0,
) -> List[Tuple[str, List[Tuple[str, Pattern]]]]:
    """
    Compile an ordered {label: [keyword, ...]} table once.

    Returns:
        Ordered list of (label, [(keyword, compiled regex), ...])
    """
    return [
        (label, [(keyword, compile_keyword(keyword, whole_word_max_length)) for keyword in keywords])
        for label, keywords in table.items()
    ]


def match_keyword_table(
    text: str,
    table: Sequence[Tuple[str, Sequence[Tuple[str, Pattern]]]]
) -> Optional[Tuple[str, str]]:
    """
    Find the first label whose keywords occur in text.

    Returns:
        Tuple of (label, keyword) or None
    """
    if not text:
        return None
    for label, keywords in table:
        for keyword, regex in keywords:
            if regex.search(text):
                return (label, keyword)
    return None
