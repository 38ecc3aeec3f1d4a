"""API clients for media databases."""

from .base import MediaAPIClient
from .tmdb_client import TMDBClient
from .omdb_client import OMDbClient
from ..config import FinderConfig
from ..errors import ProviderConfigError


class MediaAPIFactory:
    """Factory for creating media API clients."""

    @staticmethod
    def create_client(config: FinderConfig) -> MediaAPIClient:
        """
        Create an API client for the configured provider.

        Args:
            config: FinderConfig naming the provider and its credential

        Returns:
            Appropriate MediaAPIClient instance

        Raises:
            ProviderConfigError: If the provider is invalid or its API key is missing
        """
        if config.provider == 'tmdb':
            return TMDBClient(config.api_key, base_url=config.base_url, timeout=config.timeout)

        elif config.provider == 'omdb':
            if not config.api_key:
                raise ProviderConfigError(f"{config.api_key_env} environment variable not set")
            return OMDbClient(config.api_key, base_url=config.base_url, timeout=config.timeout)

        else:
            raise ProviderConfigError(f"Invalid provider: {config.provider}. Must be 'tmdb' or 'omdb'")


__all__ = ['MediaAPIClient', 'MediaAPIFactory', 'TMDBClient', 'OMDbClient']
