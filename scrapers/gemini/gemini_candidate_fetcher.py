"""
Gemini Candidate Fetcher

PURPOSE:
Ask Gemini (with Google Search grounding) for companies that use Greenhouse
or Lever. Grounded responses can't use response_mime_type="application/json",
so Gemini often wraps the array in a ```json fence; that is stripped before
parsing.

USAGE:
    from scrapers.gemini.gemini_candidate_fetcher import GeminiCandidateFetcher

    fetcher = GeminiCandidateFetcher(api_key='...')
    candidates = fetcher.fetch(prompt)
"""

import logging
from typing import List, Optional

from google import genai
from google.genai import types

from pipeline.errors import UpstreamError
from scrapers.common.candidates import CompanyCandidate, parse_candidates

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
SOURCE_NAME = "gemini"


class GeminiCandidateFetcher:
    """Structured content generation backend (variant B)."""

    source = SOURCE_NAME

    def __init__(self, api_key: str, model: str = DEFAULT_MODEL, search_grounding: bool = True):
        self.api_key = api_key
        self.model = model
        self.search_grounding = search_grounding
        self._client = None

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def build_config(self) -> Optional[types.GenerateContentConfig]:
        if not self.search_grounding:
            return None
        grounding_tool = types.Tool(google_search=types.GoogleSearch())
        return types.GenerateContentConfig(tools=[grounding_tool])

    def fetch(self, prompt: str) -> List[CompanyCandidate]:
        """
        Fetch candidate companies.

        Raises:
            UpstreamError: API call failed or the reply could not be parsed
        """
        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=self.build_config()
            )
            text = response.text
        except Exception as e:
            # google-genai raises several unrelated types (APIError, httpx errors, ValueError)
            raise UpstreamError(f"generate_content failed: {e}", source=self.source) from e

        candidates = parse_candidates(text, source=self.source, strip_fences=True)
        logger.info(f"[{self.source}] {self.model} returned {len(candidates)} candidates")
        return candidates
