"""Provider configuration: YAML file overlaid by environment variables."""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, Optional

import yaml

from .errors import ProviderConfigError

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / 'finder_config.yaml'

PROVIDERS = ('tmdb', 'omdb')

# Environment variable holding each provider's credential
API_KEY_ENV = {
    'tmdb': 'TMDB_API_KEY',
    'omdb': 'OMDB_API_KEY',
}

# Largest list a single upstream search page can return
PROVIDER_MAX_CAP = {
    'tmdb': 20,
    'omdb': 10,
}


@dataclass(frozen=True)
class FinderConfig:
    """Settings injected into the resolver at construction."""

    provider: str = 'tmdb'
    api_key: Optional[str] = None
    suggestion_cap: int = 12
    fallback_cap: int = 5
    fallback_include_rating: bool = True
    timeout: float = 10.0
    base_url: Optional[str] = None

    @property
    def api_key_env(self) -> str:
        return API_KEY_ENV.get(self.provider, 'API_KEY')

    def effective_cap(self, cap: int) -> int:
        """Clamp a list cap to what the selected provider can return."""
        return max(1, min(cap, PROVIDER_MAX_CAP.get(self.provider, cap)))


def _read_yaml(path: Path) -> Dict:
    if not path.exists():
        return {}

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ProviderConfigError(f"Invalid config file {path}: {e}")

    if not isinstance(data, dict):
        raise ProviderConfigError(f"Config file {path} must contain a mapping")
    return data


def _to_int(name: str, value) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ProviderConfigError(f"{name} must be an integer, got {value!r}")
    if number < 1:
        raise ProviderConfigError(f"{name} must be at least 1, got {number}")
    return number


def _to_float(name: str, value) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ProviderConfigError(f"{name} must be a number, got {value!r}")
    if number <= 0:
        raise ProviderConfigError(f"{name} must be positive, got {number}")
    return number


def load_config(path: Optional[Path] = None, environ: Optional[Dict[str, str]] = None) -> FinderConfig:
    """
    Build the configuration from a YAML file and the environment.

    Args:
        path: Config file (default: finder_config.yaml in the project root)
        environ: Environment mapping (default: os.environ)

    Returns:
        FinderConfig instance

    Raises:
        ProviderConfigError: If a value is invalid or the provider is unknown
    """
    environ = os.environ if environ is None else environ
    raw = _read_yaml(Path(path) if path else DEFAULT_CONFIG_PATH)

    provider = str(environ.get('FINDER_PROVIDER') or raw.get('provider') or 'tmdb').strip().lower()
    if provider not in PROVIDERS:
        raise ProviderConfigError(
            f"Invalid provider: {provider}. Must be one of: {', '.join(PROVIDERS)}"
        )

    config = FinderConfig(provider=provider)

    suggestion_cap = environ.get('FINDER_SUGGESTION_CAP') or raw.get('suggestion_cap')
    if suggestion_cap is not None:
        config = replace(config, suggestion_cap=_to_int('suggestion_cap', suggestion_cap))

    fallback_cap = environ.get('FINDER_FALLBACK_CAP') or raw.get('fallback_cap')
    if fallback_cap is not None:
        config = replace(config, fallback_cap=_to_int('fallback_cap', fallback_cap))

    if 'fallback_include_rating' in raw:
        include_rating = raw['fallback_include_rating']
        if not isinstance(include_rating, bool):
            raise ProviderConfigError(
                f"fallback_include_rating must be true or false, got {include_rating!r}"
            )
        config = replace(config, fallback_include_rating=include_rating)

    timeout = environ.get('FINDER_TIMEOUT') or raw.get('timeout')
    if timeout is not None:
        config = replace(config, timeout=_to_float('timeout', timeout))

    if raw.get('base_url'):
        config = replace(config, base_url=str(raw['base_url']).rstrip('/'))

    # Credentials only come from the environment
    api_key = (environ.get(API_KEY_ENV[provider]) or '').strip()
    if api_key:
        config = replace(config, api_key=api_key)

    return config
