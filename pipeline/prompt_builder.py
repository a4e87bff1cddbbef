"""
Prompt text sent to both generative backends.

The models are asked for a bare JSON array of
{"company_name": ..., "registered_name": ...} objects. Companies already
known are passed in as an exclusion list.
"""

import json
from typing import Dict, List, Optional

from pipeline.config import PromptSettings


DISCOVERY_PROMPT = """
You are generating a list of companies that use Greenhouse or Lever for job postings.

Output Rules:
- Return ONLY valid JSON
- Do NOT include explanations, comments, or markdown
- Do NOT include trailing commas
- Return an array of objects
- Each object must follow this exact schema:

[
  {{
    "company_name": "Public-facing company name",
    "registered_name": "greenhouse-board-identifier"
  }}
]

Existing Companies (DO NOT include any of these):
{existing_companies}

Constraints:
- Generate as MANY companies as possible
- All companies must be:
  - {region}
  - {industry} ({sectors}, etc.)
  - Actively using Greenhouse or Lever
- Each company must be UNIQUE
- Do NOT return any company whose company_name OR registered_name already exists in the list above
- registered_name must match the Greenhouse job board identifier format (used in Greenhouse URLs)

Return only the JSON array.
"""


def build_discovery_prompt(
    existing_companies: Optional[List[Dict[str, str]]] = None,
    settings: Optional[PromptSettings] = None
) -> str:
    """
    Build the discovery prompt.

    Args:
        existing_companies: Companies to exclude, as
            {'company_name': ..., 'registered_name': ...} dicts.
            Defaults to the exclusion list in settings.
        settings: Region/industry/sector constraints (defaults apply if None)

    Returns:
        Prompt text
    """
    settings = settings or PromptSettings()
    if existing_companies is None:
        existing_companies = settings.existing_companies

    exclusions = [
        {
            'company_name': company.get('company_name', ''),
            'registered_name': company.get('registered_name', ''),
        }
        for company in existing_companies
    ]

    return DISCOVERY_PROMPT.format(
        existing_companies=json.dumps(exclusions),
        region=settings.region,
        industry=settings.industry,
        sectors=', '.join(settings.sectors),
    )
