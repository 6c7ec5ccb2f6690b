"""
Relevance Ranker - Score results against a query and sort them.

Scores are additive and clamped to 1.0:

  title match        exact 1.0 | prefix 0.8 | substring 0.5
  description / URL  prefix 0.4 | substring 0.2
  recency            < 1 hour 0.15 | < 24 hours 0.10 | < 7 days 0.05
                     (a future timestamp counts as age 0)
  type               tab 0.15, bookmark 0.10

Only the highest tier of each ladder applies, and every amount and
recency threshold is a RankingWeights field. Recency needs a
metadata["last_visited"] timestamp (epoch seconds) on the item.
"""

import time
from dataclasses import dataclass, fields
from typing import Optional

from quicksearch.search.result import ResultItem, ResultType

HOUR = 3600
DAY = 24 * HOUR


@dataclass
class RankingWeights:
    """Tunable score weights. Defaults match the stock ranking."""
    title_exact: float = 1.0
    title_prefix: float = 0.8
    title_contains: float = 0.5
    description_prefix: float = 0.4
    description_contains: float = 0.2
    recent_hour: float = 0.15
    recent_day: float = 0.10
    recent_week: float = 0.05
    recent_hour_seconds: float = HOUR
    recent_day_seconds: float = DAY
    recent_week_seconds: float = 7 * DAY
    tab_bonus: float = 0.15
    bookmark_bonus: float = 0.10

    @classmethod
    def from_settings(cls, section: Optional[dict]) -> "RankingWeights":
        """Build weights from a [ranking] settings section, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: float(v) for k, v in (section or {}).items() if k in known})


def score_item(item: ResultItem, query: str, weights: RankingWeights, now: float) -> float:
    """Compute the clamped relevance score of one item for a lower-cased query."""
    score = 0.0

    title = item.title.lower()
    if title == query:
        score += weights.title_exact
    elif title.startswith(query):
        score += weights.title_prefix
    elif query in title:
        score += weights.title_contains

    description = (item.description or item.url or "").lower()
    if description.startswith(query):
        score += weights.description_prefix
    elif query in description:
        score += weights.description_contains

    score += _recency_bonus(item.metadata.get("last_visited"), weights, now)

    if item.type == ResultType.TAB:
        score += weights.tab_bonus
    elif item.type == ResultType.BOOKMARK:
        score += weights.bookmark_bonus

    return min(max(score, 0.0), 1.0)


def _recency_bonus(last_visited: Optional[float], weights: RankingWeights, now: float) -> float:
    if not last_visited:
        return 0.0

    # A visit stamped in the future (clock skew) counts as visited just now
    age_seconds = max(now - last_visited, 0.0)
    if age_seconds < weights.recent_hour_seconds:
        return weights.recent_hour
    elif age_seconds < weights.recent_day_seconds:
        return weights.recent_day
    elif age_seconds < weights.recent_week_seconds:
        return weights.recent_week
    return 0.0


def rank_results(
    items: list[ResultItem],
    query: str,
    weights: Optional[RankingWeights] = None,
    now: Optional[float] = None,
) -> list[ResultItem]:
    """
    Populate each item's rank and sort descending.

    Args:
        items: Results from a single source
        query: Normalized query; an empty query leaves items untouched
        weights: Score weights, stock weights if omitted
        now: Reference time for recency, epoch seconds

    Returns:
        The same item objects, highest rank first (stable for ties)
    """
    if not query:
        return items

    weights = weights or RankingWeights()
    now = time.time() if now is None else now

    for item in items:
        item.rank = score_item(item, query, weights, now)

    return sorted(items, key=lambda item: item.rank, reverse=True)
