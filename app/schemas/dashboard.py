"""
app/schemas/dashboard.py

Response schemas for dashboard endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class SummaryStatsResponse(BaseModel):
    total_buzz: float
    avg_yoy: float
    total_search: float
    keyword_count: int = Field(..., ge=0)
    top_keywords: list[str] = Field(default_factory=list)


class TrendPointResponse(BaseModel):
    period: str
    year: int
    month: str
    category: str
    value: float
    count: int = Field(..., ge=1)


class TrendResponse(BaseModel):
    metric: str
    points: list[TrendPointResponse] = Field(default_factory=list)


class ChartPointResponse(BaseModel):
    """
    One keyword from the latest snapshot; ``yoy`` is a percentage.
    """

    keyword: str
    buzz: float
    yoy: float
    search: float
    quadrant: str
    category: str


class ChartPointListResponse(BaseModel):
    points: list[ChartPointResponse] = Field(default_factory=list)
    use_log_scale: bool = False


class FilterOptionsResponse(BaseModel):
    categories: list[str] = Field(default_factory=list)
    quadrants: list[str] = Field(default_factory=list)
    years: list[int] = Field(default_factory=list)
    periods: list[str] = Field(default_factory=list)


class InsightResponse(BaseModel):
    kind: str
    message: str
    keyword: str | None = None
    value: float | None = None


class InsightListResponse(BaseModel):
    insights: list[InsightResponse] = Field(default_factory=list)


class RecommendationResponse(BaseModel):
    keyword: str
    reason: str
    score: float


class RecommendationListResponse(BaseModel):
    recommendations: list[RecommendationResponse] = Field(default_factory=list)
