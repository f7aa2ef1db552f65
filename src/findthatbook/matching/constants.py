# ABOUTME: Fixed weights, thresholds, and per-strategy scores for the matching engine.
# ABOUTME: Shared by the strategies, the strength evaluator, and the registry weight check.

# Strategy names, also the keys of MatchResult.strategy_scores.
TITLE = "Title"
AUTHOR = "Author"
YEAR = "Year"
KEYWORD = "Keyword"

# Strategy weights, must sum to 1.0
TITLE_WEIGHT = 0.40
AUTHOR_WEIGHT = 0.35
YEAR_WEIGHT = 0.10
KEYWORD_WEIGHT = 0.15

# Match strength thresholds
EXACT_MATCH_THRESHOLD = 0.95
STRONG_MATCH_THRESHOLD = 0.70
HIGH_TITLE_THRESHOLD = 0.85
PARTIAL_MATCH_THRESHOLD = 0.60
MODERATE_MATCH_THRESHOLD = 0.40
WEAK_MATCH_THRESHOLD = 0.30
YEAR_CONFIRMATION_THRESHOLD = 0.80

# Title scores
TITLE_EXACT_SCORE = 1.0
TITLE_CONTAINS_SCORE = 0.85
TITLE_CONTAINED_SCORE = 0.75
TITLE_WORD_MATCH_BASE_SCORE = 0.50
TITLE_WORD_MATCH_MULTIPLIER = 0.30
TITLE_LOW_WORD_MATCH_MULTIPLIER = 0.40
# Also the author score needed alongside a high title score for a Strong tier.
TITLE_WORD_MATCH_RATIO_THRESHOLD = 0.50

# Author scores
AUTHOR_EXACT_SCORE = 1.0
AUTHOR_LAST_NAME_ONLY_SCORE = 0.70
AUTHOR_LAST_NAME_WITH_FIRST_SCORE = 0.90
AUTHOR_PARTIAL_BASE_SCORE = 0.50
AUTHOR_PARTIAL_MULTIPLIER = 0.30
AUTHOR_PARTIAL_RATIO_THRESHOLD = 0.50
AUTHOR_MIN_PART_LENGTH = 2

# Year scores
YEAR_EXACT_SCORE = 1.0
YEAR_CLOSE_SCORE = 0.80
YEAR_APPROXIMATE_SCORE = 0.50
YEAR_CLOSE_RANGE = 2
YEAR_APPROXIMATE_RANGE = 5

# Allowed drift when checking that the weights sum to 1.0.
WEIGHT_SUM_TOLERANCE = 1e-9
