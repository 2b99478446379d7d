"""
Percent-encoding of location names used as URL path segments.
"""

from urllib.parse import quote, unquote


def to_path_segment(name: str) -> str:
    """
    Encode a location name for use as one URL path segment.

    Every reserved character, "/" included, is percent-encoded as UTF-8,
    so "Sant Pere, Santa Caterina i la Ribera" stays a single segment.
    """
    if not isinstance(name, str):
        return ""
    return quote(name, safe='', encoding='utf-8')


def from_path_segment(segment: str) -> str:
    """Decode a path segment produced by to_path_segment. Never raises."""
    if not isinstance(segment, str):
        return ""
    # errors='replace' keeps malformed UTF-8 sequences from raising
    return unquote(segment, encoding='utf-8', errors='replace')
