"""
Free-text option matching.

This module provides the OptionMatcher class that resolves what a user typed
to one of the names currently offered for a level, trying an exact
(case-insensitive) match first and a fuzzy match second.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from rapidfuzz import fuzz, process

from ..utils.data_utils import normalize_key, safe_string_conversion


@dataclass(frozen=True)
class OptionMatch:
    """A resolved option with its similarity score and the strategy that found it."""

    value: str
    score: float
    strategy: str  # 'exact', 'index' or 'fuzzy'


class OptionMatcher:
    """
    Resolves user input against an ordered option list.

    Numeric input selects by 1-based position, so "3" picks the third option.
    """

    def __init__(self, threshold: int = 85, min_suggestion_score: int = 60,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the OptionMatcher.

        Args:
            threshold: Minimum similarity (0-100) for a fuzzy match to be accepted
            min_suggestion_score: Minimum similarity for a name to be suggested
            logger: Optional logger instance
        """
        if not 0 <= threshold <= 100:
            raise ValueError("Threshold must be between 0 and 100")

        self.threshold = threshold
        self.min_suggestion_score = min_suggestion_score
        self.logger = logger or logging.getLogger(__name__)

    def match(self, text: str, options: Sequence[str]) -> Optional[OptionMatch]:
        """
        Resolve `text` to one of `options`.

        Args:
            text: What the user typed
            options: Currently offered names

        Returns:
            OptionMatch, or None if nothing is close enough
        """
        query = safe_string_conversion(text)
        if not query or not options:
            return None

        if query.isdigit():
            position = int(query)
            if 1 <= position <= len(options):
                return OptionMatch(options[position - 1], 100.0, 'index')

        key = normalize_key(query)
        for option in options:
            if normalize_key(option) == key:
                return OptionMatch(option, 100.0, 'exact')

        # rapidfuzz returns (match, score, index)
        best_match = process.extractOne(
            query,
            list(options),
            scorer=fuzz.WRatio,
            processor=normalize_key,
            score_cutoff=self.threshold
        )
        if best_match is None:
            self.logger.debug(f"No option within {self.threshold}% of '{query}'")
            return None

        value, score, _ = best_match
        self.logger.debug(f"Fuzzy matched '{query}' to '{value}' ({score:.1f}%)")
        return OptionMatch(value, float(score), 'fuzzy')

    def suggestions(self, text: str, options: Sequence[str], limit: int = 5) -> List[str]:
        """
        Names resembling `text`, best first.

        Args:
            text: What the user typed
            options: Currently offered names
            limit: Maximum number of suggestions

        Returns:
            Up to `limit` option names scoring at least `min_suggestion_score`
        """
        query = safe_string_conversion(text)
        if not query or not options or limit <= 0:
            return []

        alternatives = process.extract(
            query,
            list(options),
            scorer=fuzz.WRatio,
            processor=normalize_key,
            limit=limit,
            score_cutoff=self.min_suggestion_score
        )
        return [name for name, _, _ in alternatives]
