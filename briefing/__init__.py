"""
Public API for the daily AI news briefing build.
"""
from briefing.models import Article, BuildResult, Category
from briefing.pipeline import BriefingPipeline
from briefing.settings import BriefingSettings, load_settings

__all__ = [
    "Article",
    "BriefingPipeline",
    "BriefingSettings",
    "BuildResult",
    "Category",
    "load_settings",
]
