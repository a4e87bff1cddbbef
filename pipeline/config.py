"""
Discovery pipeline configuration.

Non-secret settings live in config/discovery.yaml. The two API secrets are
read from the environment (a local .env is loaded via python-dotenv):

    OLLAMA_API_KEY=...   # bearer token for the Ollama cloud chat API
    GOOGLE_API_KEY=...   # Gemini API key

USAGE:
    from pipeline.config import load_settings

    settings = load_settings()               # config/discovery.yaml
    settings = load_settings('custom.yaml')  # explicit path
"""

import os
import logging
import yaml
from pathlib import Path
from typing import Dict, List, Optional, Union
from dataclasses import dataclass, field

from dotenv import load_dotenv

from pipeline.errors import StartupConfigError

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / 'config' / 'discovery.yaml'


@dataclass
class PromptSettings:
    """What kind of companies to ask the models for."""
    region: str = "US-based"
    industry: str = "Healthcare-related"
    sectors: List[str] = field(default_factory=lambda: [
        "hospitals", "health systems", "clinics", "health tech",
        "biotech", "pharma", "diagnostics", "care providers",
    ])
    existing_companies: List[Dict[str, str]] = field(default_factory=list)


@dataclass
class DiscoverySettings:
    ollama_api_key: str
    google_api_key: str
    interval_seconds: int = 60
    output_dir: Path = Path('.')
    greenhouse_only_file: str = 'greenhouse_only.txt'
    lever_only_file: str = 'lever_only.txt'
    both_file: str = 'both.txt'
    probe_max_workers: int = 20
    probe_timeout_seconds: float = 15
    ollama_host: str = 'https://ollama.com'
    ollama_model: str = 'gpt-oss:20b'
    ollama_web_search: bool = True
    ollama_timeout_seconds: float = 300
    gemini_model: str = 'gemini-2.5-flash'
    gemini_search_grounding: bool = True
    prompt: PromptSettings = field(default_factory=PromptSettings)

    def output_paths(self) -> Dict[str, Path]:
        """Bucket name -> output file path."""
        return {
            'greenhouse_only': self.output_dir / self.greenhouse_only_file,
            'lever_only': self.output_dir / self.lever_only_file,
            'both': self.output_dir / self.both_file,
        }


def read_secret(name: str) -> str:
    """Read a required secret from the environment, stripped of whitespace."""
    value = (os.getenv(name) or '').strip()
    if not value:
        raise StartupConfigError(f"{name} is not set in environment variables")
    return value


def load_config_file(config_path: Optional[Union[str, Path]] = None) -> Dict:
    """
    Load the YAML config file.

    A missing default file is not an error (defaults apply). A missing
    explicit path, or a file that is not valid YAML, is.
    """
    explicit = config_path is not None
    path = Path(config_path) if explicit else DEFAULT_CONFIG_PATH

    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        if explicit:
            raise StartupConfigError(f"Config file not found: {path}")
        logger.warning(f"Config not found at {path}. Using defaults.")
        return {}
    except (OSError, yaml.YAMLError) as e:
        raise StartupConfigError(f"Failed to read config {path}: {e}") from e

    if not isinstance(data, dict):
        raise StartupConfigError(f"Config {path} must be a mapping, got {type(data).__name__}")

    logger.debug(f"Loaded discovery config from {path}")
    return data


def config_section(data: dict, key: str) -> dict:
    """Return a top-level config section, requiring it to be a mapping."""
    section = data.get(key)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise StartupConfigError(f"{key} must be a mapping, got {type(section).__name__}")
    return section


def load_prompt_settings(prompt_data: dict) -> PromptSettings:
    """
    Build PromptSettings from the `prompt` section.

    Raises:
        StartupConfigError: if a field has the wrong shape
    """
    defaults = PromptSettings()

    for key in ('region', 'industry'):
        if key in prompt_data and not isinstance(prompt_data[key], str):
            raise StartupConfigError(f"prompt.{key} must be a string")

    sectors = prompt_data.get('sectors')
    if sectors is None or sectors == []:
        sectors = defaults.sectors
    elif not isinstance(sectors, list) or not all(isinstance(s, str) for s in sectors):
        raise StartupConfigError("prompt.sectors must be a list of strings")

    existing = prompt_data.get('existing_companies')
    if existing is None:
        existing = []
    elif not isinstance(existing, list) or not all(isinstance(c, dict) for c in existing):
        raise StartupConfigError(
            "prompt.existing_companies must be a list of mappings with company_name / registered_name"
        )

    return PromptSettings(
        region=prompt_data.get('region', defaults.region),
        industry=prompt_data.get('industry', defaults.industry),
        sectors=list(sectors),
        existing_companies=list(existing),
    )


def load_settings(config_path: Optional[Union[str, Path]] = None) -> DiscoverySettings:
    """
    Build DiscoverySettings from the config file and environment.

    Raises:
        StartupConfigError: if a required secret is missing or the config
            file cannot be read
    """
    ollama_api_key = read_secret('OLLAMA_API_KEY')
    google_api_key = read_secret('GOOGLE_API_KEY')

    data = load_config_file(config_path)
    output_files = config_section(data, 'output_files')
    probes = config_section(data, 'probes')
    ollama = config_section(data, 'ollama')
    gemini = config_section(data, 'gemini')
    prompt = load_prompt_settings(config_section(data, 'prompt'))

    try:
        settings = DiscoverySettings(
            ollama_api_key=ollama_api_key,
            google_api_key=google_api_key,
            interval_seconds=int(data.get('interval_seconds', 60)),
            output_dir=Path(data.get('output_dir') or '.'),
            greenhouse_only_file=output_files.get('greenhouse_only', 'greenhouse_only.txt'),
            lever_only_file=output_files.get('lever_only', 'lever_only.txt'),
            both_file=output_files.get('both', 'both.txt'),
            probe_max_workers=int(probes.get('max_workers', 20)),
            probe_timeout_seconds=float(probes.get('timeout_seconds', 15)),
            ollama_host=ollama.get('host', 'https://ollama.com').rstrip('/'),
            ollama_model=ollama.get('model', 'gpt-oss:20b'),
            ollama_web_search=bool(ollama.get('web_search', True)),
            ollama_timeout_seconds=float(ollama.get('timeout_seconds', 300)),
            gemini_model=gemini.get('model', 'gemini-2.5-flash'),
            gemini_search_grounding=bool(gemini.get('search_grounding', True)),
            prompt=prompt,
        )
    except (AttributeError, TypeError, ValueError) as e:
        raise StartupConfigError(f"Invalid discovery config value: {e}") from e

    if settings.interval_seconds < 1:
        raise StartupConfigError("interval_seconds must be at least 1")
    if settings.probe_max_workers < 1:
        raise StartupConfigError("probes.max_workers must be at least 1")

    return settings
