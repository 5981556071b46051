"""Identifier normalization for Unify.

Turns paths, URLs, URIs and bare IDs into Unified IDs (UIDs): stable,
location-independent lookup keys.

See: unify.core.identity.normalize for the pure function API
"""

from .normalize import normalize, extract_tags, split_tag
from .tables import diacritic_table, punctuation_table
from .uid import Uid

__all__ = [
    # Pure normalization functions
    "normalize",
    "extract_tags",
    "split_tag",
    # Substitution tables
    "diacritic_table",
    "punctuation_table",
    # Value type
    "Uid",
]
