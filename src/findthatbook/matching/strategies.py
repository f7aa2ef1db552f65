# ABOUTME: The four matching strategies (title, author, year, keyword) and their shared protocol.
# ABOUTME: Each scores one signal between a SearchIntent and a CandidateRecord in [0.0, 1.0].

from typing import Protocol, runtime_checkable

from findthatbook.matching import constants as c
from findthatbook.matching.normalizer import normalize, split_into_words
from findthatbook.matching.types import CandidateRecord, SearchIntent, StrategyScore


@runtime_checkable
class MatchingStrategy(Protocol):
    """Protocol for a single-signal scorer.

    The registry calls evaluate() only when can_evaluate() is true; otherwise
    it records StrategyScore.no_match(weight) on the strategy's behalf.
    """

    @property
    def name(self) -> str: ...

    @property
    def weight(self) -> float: ...

    def can_evaluate(self, intent: SearchIntent) -> bool: ...

    def evaluate(self, record: CandidateRecord, intent: SearchIntent) -> StrategyScore: ...


def _overlaps(a: str, b: str) -> bool:
    """Symmetric substring containment between two tokens."""
    return a in b or b in a


class TitleMatchingStrategy:
    """Scores title similarity: exact, containment, then word overlap."""

    @property
    def name(self) -> str:
        return c.TITLE

    @property
    def weight(self) -> float:
        return c.TITLE_WEIGHT

    def can_evaluate(self, intent: SearchIntent) -> bool:
        return intent.has_title

    def evaluate(self, record: CandidateRecord, intent: SearchIntent) -> StrategyScore:
        if not self.can_evaluate(intent):
            return StrategyScore.no_match(self.weight)

        record_title = normalize(record.title)
        search_title = normalize(intent.title)
        # A title made only of stripped punctuation would "contain" everything.
        if not record_title or not search_title:
            return StrategyScore.no_match(self.weight)

        if record_title == search_title:
            return StrategyScore.create(
                c.TITLE_EXACT_SCORE, self.weight, f'Title exact match: "{record.title}"'
            )

        if search_title in record_title:
            return StrategyScore.create(
                c.TITLE_CONTAINS_SCORE,
                self.weight,
                f'Title contains search term: "{intent.title}"',
            )

        if record_title in search_title:
            return StrategyScore.create(
                c.TITLE_CONTAINED_SCORE,
                self.weight,
                f'Search term contains title: "{record.title}"',
            )

        return self._word_match(record_title, search_title)

    def _word_match(self, record_title: str, search_title: str) -> StrategyScore:
        search_words = split_into_words(search_title)
        title_words = split_into_words(record_title)

        matched = sum(
            1 for sw in search_words if any(_overlaps(sw, tw) for tw in title_words)
        )
        if matched == 0:
            return StrategyScore.no_match(self.weight)

        total = len(search_words)
        ratio = matched / total
        if ratio >= c.TITLE_WORD_MATCH_RATIO_THRESHOLD:
            score = c.TITLE_WORD_MATCH_BASE_SCORE + ratio * c.TITLE_WORD_MATCH_MULTIPLIER
            return StrategyScore.create(
                score, self.weight, f"Title word match: {matched}/{total} words matched"
            )

        return StrategyScore.create(
            ratio * c.TITLE_LOW_WORD_MATCH_MULTIPLIER,
            self.weight,
            f"Title partial word match: {matched}/{total} words",
        )


class AuthorMatchingStrategy:
    """Scores author similarity against the record's authors, in order.

    The first author producing any match wins, even if a later author would
    score higher.
    """

    @property
    def name(self) -> str:
        return c.AUTHOR

    @property
    def weight(self) -> float:
        return c.AUTHOR_WEIGHT

    def can_evaluate(self, intent: SearchIntent) -> bool:
        return intent.has_author

    def evaluate(self, record: CandidateRecord, intent: SearchIntent) -> StrategyScore:
        if not self.can_evaluate(intent) or not record.authors:
            return StrategyScore.no_match(self.weight)

        search_author = normalize(intent.author)
        search_parts = search_author.split()

        for author in record.authors:
            score = self._evaluate_author(author, search_author, search_parts)
            if score.has_match:
                return score

        return StrategyScore.no_match(self.weight)

    def _evaluate_author(
        self, author: str, search_author: str, search_parts: list[str]
    ) -> StrategyScore:
        normalized_author = normalize(author)
        author_parts = normalized_author.split()
        if not author_parts or not search_parts:
            return StrategyScore.no_match(self.weight)

        if normalized_author == search_author:
            return StrategyScore.create(
                c.AUTHOR_EXACT_SCORE, self.weight, f'Author exact match: "{author}"'
            )

        # Last name match (the most common way people remember an author)
        last_name_match = any(
            ap == sp and len(ap) > c.AUTHOR_MIN_PART_LENGTH
            for ap in author_parts
            for sp in search_parts
        )
        if last_name_match:
            last_part = author_parts[-1]
            first_name_match = any(
                (ap.startswith(sp) or sp.startswith(ap)) and ap != last_part
                for ap in author_parts
                for sp in search_parts
            )
            single_token = len(search_parts) == 1
            if first_name_match or single_token:
                score = (
                    c.AUTHOR_LAST_NAME_ONLY_SCORE
                    if single_token
                    else c.AUTHOR_LAST_NAME_WITH_FIRST_SCORE
                )
                return StrategyScore.create(score, self.weight, f'Author match: "{author}"')

        matched = sum(
            1 for sp in search_parts if any(_overlaps(sp, ap) for ap in author_parts)
        )
        if matched > 0:
            ratio = matched / len(search_parts)
            if ratio >= c.AUTHOR_PARTIAL_RATIO_THRESHOLD:
                score = c.AUTHOR_PARTIAL_BASE_SCORE + ratio * c.AUTHOR_PARTIAL_MULTIPLIER
                return StrategyScore.create(
                    score, self.weight, f'Author partial match: "{author}"'
                )

        return StrategyScore.no_match(self.weight)


class YearMatchingStrategy:
    """Scores distance between the searched and first-published years."""

    @property
    def name(self) -> str:
        return c.YEAR

    @property
    def weight(self) -> float:
        return c.YEAR_WEIGHT

    def can_evaluate(self, intent: SearchIntent) -> bool:
        return intent.year is not None

    def evaluate(self, record: CandidateRecord, intent: SearchIntent) -> StrategyScore:
        if not self.can_evaluate(intent) or record.first_publish_year is None:
            return StrategyScore.no_match(self.weight)

        record_year = record.first_publish_year
        search_year = intent.year
        diff = abs(record_year - search_year)

        if diff == 0:
            return StrategyScore.create(
                c.YEAR_EXACT_SCORE, self.weight, f"Year exact match: {record_year}"
            )
        if diff <= c.YEAR_CLOSE_RANGE:
            return StrategyScore.create(
                c.YEAR_CLOSE_SCORE,
                self.weight,
                f"Year close match: {record_year} (searched: {search_year})",
            )
        if diff <= c.YEAR_APPROXIMATE_RANGE:
            return StrategyScore.create(
                c.YEAR_APPROXIMATE_SCORE,
                self.weight,
                f"Year approximate match: {record_year}",
            )
        return StrategyScore.no_match(self.weight)


class KeywordMatchingStrategy:
    """Scores the share of intent keywords found in title, authors, and subjects."""

    @property
    def name(self) -> str:
        return c.KEYWORD

    @property
    def weight(self) -> float:
        return c.KEYWORD_WEIGHT

    def can_evaluate(self, intent: SearchIntent) -> bool:
        return intent.has_keywords

    def evaluate(self, record: CandidateRecord, intent: SearchIntent) -> StrategyScore:
        if not self.can_evaluate(intent):
            return StrategyScore.no_match(self.weight)

        haystack = normalize(
            " ".join([record.title, " ".join(record.authors), " ".join(record.subjects)])
        )

        matched: list[str] = []
        for keyword in intent.keywords:
            needle = normalize(keyword)
            # Punctuation-only keywords normalize to "" and must not match everything.
            if needle and needle in haystack:
                matched.append(keyword)

        if not matched:
            return StrategyScore.no_match(self.weight)

        ratio = len(matched) / len(intent.keywords)
        return StrategyScore.create(
            ratio, self.weight, f"Keywords matched: {', '.join(matched)}"
        )


def default_strategies() -> list[MatchingStrategy]:
    """The standard strategies in registration order: title, author, year, keyword."""
    return [
        TitleMatchingStrategy(),
        AuthorMatchingStrategy(),
        YearMatchingStrategy(),
        KeywordMatchingStrategy(),
    ]
