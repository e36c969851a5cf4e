"""
Matching primitives for the Ledger Classification Engine.

Pure string and regex helpers shared by every higher-level detector:
- Preprocessing (text normalization, field combination, decimal parsing)
- Pattern matching (keywords, regex tables, per-field match modes, fuzzy similarity)
"""

from .preprocess import (
    normalize_text,
    combine_fields,
    parse_decimal,
)
from .pattern_matching import (
    MATCH_CONTAINS,
    MATCH_STARTS_WITH,
    MATCH_ENDS_WITH,
    MATCH_REGEX,
    MATCH_MODES,
    compile_pattern,
    compile_named_patterns,
    match_named_patterns,
    match_keywords,
    match_value,
    fuzzy_best_match,
    compile_keyword,
    compile_keyword_table,
    match_keyword_table,
)

__all__ = [
    # Preprocessing utilities
    "normalize_text",
    "combine_fields",
    "parse_decimal",
    # Pattern matching utilities
    "MATCH_CONTAINS",
    "MATCH_STARTS_WITH",
    "MATCH_ENDS_WITH",
    "MATCH_REGEX",
    "MATCH_MODES",
    "compile_pattern",
    "compile_named_patterns",
    "match_named_patterns",
    "match_keywords",
    "match_value",
    "fuzzy_best_match",
    "compile_keyword",
    "compile_keyword_table",
    "match_keyword_table",
]
