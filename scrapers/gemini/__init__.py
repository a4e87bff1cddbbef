from scrapers.gemini.gemini_candidate_fetcher import GeminiCandidateFetcher

__all__ = ['GeminiCandidateFetcher']
