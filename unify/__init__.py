"""Unify: canonical, location-independent IDs for paths, URLs and IDs."""

from .core.identity import Uid, extract_tags, normalize, split_tag
from .infrastructure.index import AssetIndex

__version__ = "1.0.1"

__all__ = [
    "AssetIndex",
    "Uid",
    "extract_tags",
    "normalize",
    "split_tag",
    "__version__",
]
