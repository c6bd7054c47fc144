"""On-page SEO analysis: scoring, keyword suggestions and orchestration."""

from seo_analyzer.seo.analyzer import PageAnalysis, analyze_url
from seo_analyzer.seo.keywords import suggest_keywords
from seo_analyzer.seo.scoring import ScoreResult, score_page

__all__ = ["analyze_url", "PageAnalysis", "suggest_keywords", "score_page", "ScoreResult"]
