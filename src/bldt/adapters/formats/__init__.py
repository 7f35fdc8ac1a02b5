"""Format adapters for the remote catalog formats used by the built-in tables."""

from .genocide_html import GenocideHtmlAdapter
from .score_json import ScoreJsonAdapter

__all__ = ["GenocideHtmlAdapter", "ScoreJsonAdapter"]
