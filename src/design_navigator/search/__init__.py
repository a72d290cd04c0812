"""Search package for the design navigator.

This package contains the in-memory semantic index, the query scorers, the
navigator and validation engines, and the service layer combining them.
"""

from design_navigator.search.index import IndexPaths, SemanticIndex
from design_navigator.search.navigator import NavigatorEngine
from design_navigator.search.scoring import KeywordScorer, QueryScorer, SemanticScorer
from design_navigator.search.service import Service
from design_navigator.search.validation import ValidationEngine

__all__ = [
    "IndexPaths",
    "KeywordScorer",
    "NavigatorEngine",
    "QueryScorer",
    "SemanticIndex",
    "SemanticScorer",
    "Service",
    "ValidationEngine",
]
