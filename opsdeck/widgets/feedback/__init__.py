"""Modal feedback widgets: filter prompt and fuzzy quick-pick."""

from opsdeck.widgets.feedback.filter_prompt import FilterPrompt
from opsdeck.widgets.feedback.fuzzy_search import FuzzySearchModal, FuzzySearchResult

__all__ = ["FilterPrompt", "FuzzySearchModal", "FuzzySearchResult"]
