"""skinmatch — rule-based skincare recommendation pipeline."""

from skinmatch.services.engine import RecommendationEngine, RecommendationService

__all__ = ["RecommendationEngine", "RecommendationService"]
