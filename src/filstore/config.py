import os
from dataclasses import dataclass
from typing import Any, Dict, Optional
from .constants import DEFAULT_NETWORK, NETWORKS, RPC_URLS, ERROR_MESSAGES
from .errors import ConfigurationError


@dataclass
class StorageOptions:
    """
    Connection settings for the storage network.
    Exactly one of private_key or provider must be set.
    """
    private_key: Optional[str] = None
    provider: Any = None  # externally supplied signer
    network: str = DEFAULT_NETWORK
    authorization: Optional[str] = None  # RPC (GLIF) auth token
    with_cdn: bool = True

    @classmethod
    def from_env(cls, prefix: str = 'FILSTORE_') -> 'StorageOptions':
        return cls(
            private_key=os.getenv(f'{prefix}PRIVATE_KEY') or None,
            network=os.getenv(f'{prefix}NETWORK') or DEFAULT_NETWORK,
            authorization=os.getenv(f'{prefix}AUTHORIZATION') or None
        )

    def validate(self) -> 'StorageOptions':
        if not self.private_key and self.provider is None:
            raise ConfigurationError()
        if self.network not in NETWORKS:
            raise ConfigurationError(
                ERROR_MESSAGES['UNKNOWN_NETWORK'].format(network=self.network)
            )
        return self

    def sdk_kwargs(self) -> Dict:
        """Keyword arguments for AsyncSynapse.create()"""
        if not self.private_key:
            # The SDK signs with a raw key; external signers need a custom network_factory
            raise ConfigurationError(ERROR_MESSAGES['PROVIDER_UNSUPPORTED'])
        return {
            'rpc_url': RPC_URLS[self.network],
            'chain': self.network,
            'private_key': self.private_key
        }
