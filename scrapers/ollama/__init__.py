from scrapers.ollama.ollama_candidate_fetcher import OllamaCandidateFetcher

__all__ = ['OllamaCandidateFetcher']
