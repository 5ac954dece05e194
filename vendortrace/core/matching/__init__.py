"""Matching vendored trees against upstream history."""

from vendortrace.core.matching.match_usecase import (
    MatchRequest,
    MatchResponse,
    MatchUseCase,
)

__all__ = ["MatchRequest", "MatchResponse", "MatchUseCase"]
