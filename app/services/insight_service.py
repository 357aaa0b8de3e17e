"""
app/services/insight_service.py

Rule-based headline insights and "keywords to watch" recommendations.

Both read the latest snapshot of the already-filtered records, so every
keyword contributes exactly once with its most recent figures.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Sequence

from app.domain.buzz_record import BuzzRecord
from app.services.snapshot_service import latest_per_keyword

# ---------------------------------------------------------------------------
# Thresholds (yoy in percent)
# ---------------------------------------------------------------------------

FAST_GROWTH_YOY: Final[float] = 50.0
OVERALL_DIRECTION_YOY: Final[float] = 5.0
DECLINE_YOY: Final[float] = -20.0
EMERGING_BUZZ_RATIO: Final[float] = 0.5

RECOMMEND_GROWTH_YOY: Final[float] = 30.0
RECOMMEND_HOT_RATIO: Final[float] = 0.3
RECOMMEND_HIGH_BUZZ_RATIO: Final[float] = 0.5


class InsightKind:
    TOP_GROWTH = "top_growth"
    TOP_BUZZ = "top_buzz"
    OVERALL_DIRECTION = "overall_direction"
    DECLINING = "declining"
    EMERGING = "emerging"


class RecommendationReason:
    HOT_AND_GROWING = "高增长 + 高声量"
    FAST_GROWTH = "快速增长"
    HIGH_BUZZ = "高声量"
    WATCH_DECLINE = "需关注下降趋势"
    STABLE = "稳定表现"


@dataclass(frozen=True)
class Insight:
    kind: str
    message: str
    keyword: str | None = None
    value: float | None = None


@dataclass(frozen=True)
class KeywordRecommendation:
    keyword: str
    reason: str
    score: float


def generate_insights(records: Sequence[BuzzRecord]) -> list[Insight]:
    """
    Up to five headline insights, in a fixed order; rules that do not fire
    are omitted.
    """

    snapshot = list(latest_per_keyword(records).values())
    if not snapshot:
        return []

    insights: list[Insight] = []

    top_growth = max(snapshot, key=lambda record: record.yoy_percent)
    if top_growth.yoy_percent > FAST_GROWTH_YOY:
        insights.append(
            Insight(
                kind=InsightKind.TOP_GROWTH,
                message=f"{top_growth.keyword} 增长最快 (+{top_growth.yoy_percent:.0f}%)",
                keyword=top_growth.keyword,
                value=top_growth.yoy_percent,
            )
        )

    top_buzz = max(snapshot, key=lambda record: record.buzz_total)
    if top_buzz.buzz_total > 0:
        insights.append(
            Insight(
                kind=InsightKind.TOP_BUZZ,
                message=f"{top_buzz.keyword} 声量最高 ({top_buzz.buzz_total / 1000:.1f}K)",
                keyword=top_buzz.keyword,
                value=top_buzz.buzz_total,
            )
        )

    avg_yoy = sum(record.yoy_percent for record in snapshot) / len(snapshot)
    if abs(avg_yoy) > OVERALL_DIRECTION_YOY:
        direction = "增长" if avg_yoy > 0 else "下降"
        insights.append(
            Insight(
                kind=InsightKind.OVERALL_DIRECTION,
                message=f"整体{direction} {abs(avg_yoy):.1f}%",
                value=avg_yoy,
            )
        )

    declining = [record for record in snapshot if record.yoy_percent < DECLINE_YOY]
    if declining:
        insights.append(
            Insight(
                kind=InsightKind.DECLINING,
                message=f"{len(declining)} 个关键词下降超{abs(DECLINE_YOY):.0f}%",
                value=float(len(declining)),
            )
        )

    avg_buzz = sum(record.buzz_total for record in snapshot) / len(snapshot)
    emerging = [
        record
        for record in snapshot
        if record.buzz_total < avg_buzz * EMERGING_BUZZ_RATIO and record.yoy_percent > FAST_GROWTH_YOY
    ]
    if emerging:
        insights.append(
            Insight(
                kind=InsightKind.EMERGING,
                message=f"{len(emerging)} 个新兴趋势关键词",
                value=float(len(emerging)),
            )
        )

    return insights


def _reason(buzz: float, yoy: float, max_buzz: float) -> str:
    if yoy > FAST_GROWTH_YOY and buzz > max_buzz * RECOMMEND_HOT_RATIO:
        return RecommendationReason.HOT_AND_GROWING
    if yoy > RECOMMEND_GROWTH_YOY:
        return RecommendationReason.FAST_GROWTH
    if buzz > max_buzz * RECOMMEND_HIGH_BUZZ_RATIO:
        return RecommendationReason.HIGH_BUZZ
    if yoy < DECLINE_YOY:
        return RecommendationReason.WATCH_DECLINE
    return RecommendationReason.STABLE


def recommend_keywords(records: Sequence[BuzzRecord], limit: int = 10) -> list[KeywordRecommendation]:
    """
    Score each snapshot keyword and return the best *limit*.

        score = buzz / max_buzz * 50 + clamp(yoy / 2, -25, 50)

    ``max_buzz`` is floored at 1 so an all-zero dataset still scores.
    """

    snapshot = list(latest_per_keyword(records).values())
    if not snapshot or limit <= 0:
        return []

    max_buzz = max(max(record.buzz_total for record in snapshot), 1.0)
    recommendations = []
    for record in snapshot:
        buzz = record.buzz_total
        yoy = record.yoy_percent
        score = buzz / max_buzz * 50 + min(max(yoy / 2, -25.0), 50.0)
        recommendations.append(
            KeywordRecommendation(keyword=record.keyword, reason=_reason(buzz, yoy, max_buzz), score=score)
        )

    recommendations.sort(key=lambda item: item.score, reverse=True)
    return recommendations[:limit]
