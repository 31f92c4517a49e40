"""Mistake categorization and behavioral analytics.

Rule-violation notes are free text. They are classified into a fixed
taxonomy by keyword: the first category, in declared priority order, with
a keyword contained anywhere in the lowercased note wins. Matching is by
substring, not by word, so "tilt" also matches "tilted" and "stilted".
"""

from typing import Iterable, Optional

from tradejournal.analytics.breakdown import bucket_stats, group_trades
from tradejournal.models import (
    MISTAKE_CATEGORIES,
    OTHER_CATEGORY_ID,
    MistakeAnalytics,
    MistakeSummary,
    Trade,
)
from tradejournal.pnl import ZERO, sum_pnl

_LABELS = {category.id: category.label for category in MISTAKE_CATEGORIES}


def categorize_mistake(rule_violation: Optional[str]) -> Optional[str]:
    """Classify a rule-violation note.

    Args:
        rule_violation: Free text entered with the trade, or None.

    Returns:
        The category id, "other" for text that matches no category, or
        None when no mistake was recorded (missing or blank text).
    """
    if rule_violation is None or not rule_violation.strip():
        return None

    normalized = rule_violation.lower().strip()

    for category in MISTAKE_CATEGORIES:
        if category.id == OTHER_CATEGORY_ID:
            continue
        if category.matches(normalized):
            return category.id

    return OTHER_CATEGORY_ID


def mistake_category_label(category_id: str) -> str:
    return _LABELS.get(category_id, _LABELS[OTHER_CATEGORY_ID])


def calculate_mistake_analytics(trades: Iterable[Trade]) -> MistakeAnalytics:
    """Compare trades with and without recorded mistakes and break mistakes down by category.

    Args:
        trades: Closed trades in any order.

    Returns:
        MistakeAnalytics whose ``by_frequency`` lists categories by trade
        count (ties keep first-seen order); ``by_impact`` re-sorts the same
        summaries by total P&L.
    """
    with_mistakes = []
    without_mistakes = []
    categorized = []

    for trade in trades:
        category_id = categorize_mistake(trade.rule_violation)
        if category_id is None:
            without_mistakes.append(trade)
        else:
            with_mistakes.append(trade)
            categorized.append((category_id, trade))

    grouped = group_trades(categorized, lambda pair: pair[0])

    summaries = []
    for category_id, pairs in grouped.items():
        category_trades = [trade for _, trade in pairs]
        stats = bucket_stats(category_trades)
        summaries.append(MistakeSummary(
            category_id=category_id,
            label=mistake_category_label(category_id),
            count=stats.trade_count,
            trades=tuple(category_trades),
            total_pnl=stats.total_pnl,
            avg_pnl=stats.avg_trade_pnl,
            win_rate=stats.win_rate,
        ))

    summaries.sort(key=lambda summary: summary.count, reverse=True)

    pnl_with = sum_pnl(with_mistakes)
    pnl_without = sum_pnl(without_mistakes)

    return MistakeAnalytics(
        total_trades_with_mistakes=len(with_mistakes),
        total_trades_without_mistakes=len(without_mistakes),
        by_frequency=tuple(summaries),
        pnl_with_mistakes=pnl_with,
        pnl_without_mistakes=pnl_without,
        avg_pnl_with_mistakes=pnl_with / len(with_mistakes) if with_mistakes else ZERO,
        avg_pnl_without_mistakes=pnl_without / len(without_mistakes) if without_mistakes else ZERO,
        top_mistake=summaries[0] if summaries else None,
        # min() keeps the first of equally costly categories.
        costliest_mistake=min(summaries, key=lambda summary: summary.total_pnl, default=None),
    )
