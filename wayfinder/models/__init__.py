from .access import AccessEvaluation, AccessTier
from .person import PersonCore, PersonExtended, RemoteProfileFragment
from .resolution import FallbackReason, FallbackResult, LiveResult, LoadingResult, ResolutionResult

__all__ = [
    "AccessEvaluation",
    "AccessTier",
    "FallbackReason",
    "FallbackResult",
    "LiveResult",
    "LoadingResult",
    "PersonCore",
    "PersonExtended",
    "RemoteProfileFragment",
    "ResolutionResult",
]
