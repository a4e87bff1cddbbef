"""
Ollama Cloud Candidate Fetcher

PURPOSE:
Ask a model hosted on Ollama's cloud chat API for companies that use
Greenhouse or Lever. The prompt is sent as a single system message and the
reply content is parsed as JSON as-is (no fence stripping).

API: POST https://ollama.com/api/chat  (Authorization: Bearer <OLLAMA_API_KEY>)

USAGE:
    from scrapers.ollama.ollama_candidate_fetcher import OllamaCandidateFetcher

    fetcher = OllamaCandidateFetcher(api_key='...')
    candidates = fetcher.fetch(prompt)
"""

import logging
import requests
from typing import Dict, List

from pipeline.errors import UpstreamError
from scrapers.common.candidates import CompanyCandidate, parse_candidates

logger = logging.getLogger(__name__)

OLLAMA_CLOUD_HOST = "https://ollama.com"
DEFAULT_MODEL = "gpt-oss:20b"
SOURCE_NAME = "ollama"


class OllamaCandidateFetcher:
    """Chat-completion backend (variant A)."""

    source = SOURCE_NAME

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        host: str = OLLAMA_CLOUD_HOST,
        web_search: bool = True,
        timeout: float = 300
    ):
        self.api_key = api_key
        self.model = model
        self.chat_url = f"{host.rstrip('/')}/api/chat"
        self.web_search = web_search
        self.timeout = timeout

    def build_payload(self, prompt: str) -> Dict:
        payload = {
            'model': self.model,
            'messages': [
                {'role': 'system', 'content': prompt},
            ],
            'stream': False,
        }
        if self.web_search:
            payload['options'] = {'tools': [{'type': 'webSearch'}]}
        return payload

    def fetch(self, prompt: str) -> List[CompanyCandidate]:
        """
        Fetch candidate companies.

        Raises:
            UpstreamError: request failed, non-2xx status, or unparseable reply
        """
        headers = {
            'Authorization': f"Bearer {self.api_key}",
            'Content-Type': 'application/json',
        }

        try:
            response = requests.post(
                self.chat_url,
                json=self.build_payload(prompt),
                headers=headers,
                timeout=self.timeout
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise UpstreamError(f"Chat request failed: {e}", source=self.source) from e

        # requests' JSONDecodeError is both a ValueError and a RequestException
        try:
            body = response.json()
        except ValueError as e:
            raise UpstreamError(f"Chat response body is not JSON: {e}", source=self.source) from e

        message = body.get('message') if isinstance(body, dict) else None
        content = message.get('content') if isinstance(message, dict) else None
        if content is None:
            raise UpstreamError("Chat response has no message content", source=self.source)

        candidates = parse_candidates(content, source=self.source)
        logger.info(f"[{self.source}] {self.model} returned {len(candidates)} candidates")
        return candidates
