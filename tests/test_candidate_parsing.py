"""
Test candidate parsing and shape validation

Tests:
1. strip_code_fences() utility
2. parse_candidates() success, fenced input, malformed entries
3. UpstreamError on unusable responses
"""

import sys
import json
import logging
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from pipeline.errors import UpstreamError
from scrapers.common.candidates import (
    CompanyCandidate,
    FetchResult,
    parse_candidates,
    strip_code_fences,
    validate_candidate,
)

PAYLOAD = [
    {"company_name": "Oscar Health", "registered_name": "oscar"},
    {"company_name": "Tempus", "registered_name": "tempus"},
]


class TestStripCodeFences:
    """Test Markdown fence removal"""

    def test_json_fence(self):
        """```json ... ``` wrapper is removed"""
        text = '```json\n[{"a": 1}]\n```'
        assert strip_code_fences(text) == '[{"a": 1}]'

    def test_bare_fence(self):
        """``` ... ``` wrapper without language tag is removed"""
        assert strip_code_fences('```\n[]\n```') == '[]'

    def test_no_fence(self):
        """Plain text only gets whitespace trimmed"""
        assert strip_code_fences('  [1, 2]  \n') == '[1, 2]'

    def test_empty(self):
        """Empty and None return empty string"""
        assert strip_code_fences('') == ''
        assert strip_code_fences(None) == ''

    def test_backticks_inside_values_kept(self):
        """Only the wrapper goes; backticks inside string values stay"""
        inner = '[{"company_name": "Acme ```Labs```", "registered_name": "acme"}]'
        assert strip_code_fences(f"```json\n{inner}\n```") == inner

    def test_single_line_fence(self):
        assert strip_code_fences('```json [1]```') == '[1]'


class TestParseCandidates:
    """Test parse_candidates()"""

    def test_plain_json(self):
        """Plain JSON array parses into candidates in order"""
        candidates = parse_candidates(json.dumps(PAYLOAD), source='test')
        assert candidates == [
            CompanyCandidate(company_name="Oscar Health", registered_name="oscar"),
            CompanyCandidate(company_name="Tempus", registered_name="tempus"),
        ]

    def test_fenced_matches_unwrapped(self):
        """Fenced response parses the same as the unwrapped payload"""
        raw = json.dumps(PAYLOAD, indent=2)
        fenced = f"```json\n{raw}\n```"
        assert parse_candidates(fenced, source='test', strip_fences=True) == \
            parse_candidates(raw, source='test')

    def test_fence_without_stripping_fails(self):
        """Without strip_fences a fenced reply is not valid JSON"""
        fenced = f"```json\n{json.dumps(PAYLOAD)}\n```"
        with pytest.raises(UpstreamError):
            parse_candidates(fenced, source='test')

    def test_empty_array(self):
        """Empty array is a valid (empty) result, not an error"""
        assert parse_candidates('[]', source='test') == []

    def test_whitespace_trimmed(self):
        """Names are stripped of surrounding whitespace"""
        text = json.dumps([{"company_name": "  Ro  ", "registered_name": " ro\n"}])
        assert parse_candidates(text, source='test') == [CompanyCandidate("Ro", "ro")]

    def test_malformed_entries_dropped(self, caplog):
        """Entries with missing / wrong-typed / blank fields are rejected and logged"""
        payload = PAYLOAD + [
            {"company_name": "No Slug"},
            {"registered_name": "noname"},
            {"company_name": 42, "registered_name": "numeric"},
            {"company_name": "", "registered_name": "blank"},
            "just a string",
            None,
        ]
        with caplog.at_level(logging.WARNING):
            candidates = parse_candidates(json.dumps(payload), source='test')

        assert [c.company_name for c in candidates] == ["Oscar Health", "Tempus"]
        assert "6/8 entries failed shape validation" in caplog.text

    def test_invalid_json_raises(self):
        """Unparseable text raises UpstreamError with the source attached"""
        with pytest.raises(UpstreamError) as exc_info:
            parse_candidates('Here are some companies: Oscar, Tempus', source='gemini')
        assert exc_info.value.source == 'gemini'
        assert 'gemini' in str(exc_info.value)

    def test_trailing_comma_raises(self):
        """Trailing commas are invalid JSON"""
        with pytest.raises(UpstreamError):
            parse_candidates('[{"company_name": "A", "registered_name": "a"},]', source='test')

    def test_object_instead_of_array_raises(self):
        """Top-level object is rejected"""
        with pytest.raises(UpstreamError, match='Expected a JSON array'):
            parse_candidates(json.dumps(PAYLOAD[0]), source='test')

    @pytest.mark.parametrize("text", [None, "", "   ", "```json\n```"])
    def test_empty_response_raises(self, text):
        """Empty responses raise UpstreamError"""
        with pytest.raises(UpstreamError):
            parse_candidates(text, source='test', strip_fences=True)


class TestValidateCandidate:
    """Test single-entry validation"""

    def test_extra_fields_ignored(self):
        """Unknown keys don't stop an entry being accepted"""
        entry = {"company_name": "Ro", "registered_name": "ro", "hq": "NYC"}
        assert validate_candidate(entry) == CompanyCandidate("Ro", "ro")

    def test_list_rejected(self):
        assert validate_candidate(["Ro", "ro"]) is None


class TestFetchResult:
    """Test FetchResult.ok"""

    def test_ok_without_error(self):
        assert FetchResult(source='gemini').ok

    def test_not_ok_with_error(self):
        assert not FetchResult(source='gemini', error='boom').ok
