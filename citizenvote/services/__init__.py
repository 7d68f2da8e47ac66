"""
Service layer for CitizenVote application.

This package contains business logic separated from view logic,
following the service layer pattern for better testability and reusability.
"""

from .admin_service import ReferenceDataService
from .aggregation_service import AggregationEngine
from .duplicate_review import DuplicateReviewService, FuzzyDuplicateGroup
from .voter_service import IngestionResult, VoterIngestionService

__all__ = [
    "AggregationEngine",
    "DuplicateReviewService",
    "FuzzyDuplicateGroup",
    "IngestionResult",
    "ReferenceDataService",
    "VoterIngestionService",
]
