from tidefish.engines.alpha_beta import AlphaBeta, SearchInfo

__all__ = ["AlphaBeta", "SearchInfo"]
