"""
Matching strategy components.
"""

from .suggestion_matcher import SuggestionMatcher

__all__ = ['SuggestionMatcher']
