from .candidate_selector import CandidateSelector
from .match_service import MatchService
from .matching_engine import MatchingEngine

__all__ = [
    "CandidateSelector",
    "MatchService",
    "MatchingEngine",
]
