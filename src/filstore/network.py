import dataclasses
import importlib
from collections.abc import Mapping
from typing import Any, Dict, Protocol
from loguru import logger
from .config import StorageOptions
from .constants import ERROR_MESSAGES
from .errors import ConfigurationError

SDK_MODULE = 'pynapse'


class Transaction(Protocol):
    hash: str

    async def wait(self) -> Any: ...


class PaymentsAPI(Protocol):
    async def wallet_balance(self) -> int: ...

    async def balance(self) -> int: ...

    async def account_info(self) -> Any: ...

    async def deposit(self, amount: int) -> Transaction: ...

    async def approve_service(self, service: str, rate_allowance: int,
                              lockup_allowance: int, max_lockup_period: int) -> Transaction: ...


class StorageAPI(Protocol):
    async def preflight_upload(self, size: int) -> Any: ...

    async def upload(self, data: bytes) -> Any: ...

    async def download(self, piece_cid: str) -> bytes: ...

    async def get_storage_info(self) -> Any: ...


class NetworkClient(Protocol):
    """The parts of the Synapse SDK client the wrapper talks to"""
    payments: PaymentsAPI
    storage: StorageAPI

    async def get_warm_storage_address(self) -> str: ...


class ChainTransaction:
    """A submitted transaction, identified by its hash"""

    def __init__(self, web3: Any, tx_hash: str, timeout: float = 120):
        if not tx_hash.startswith('0x'):
            tx_hash = '0x' + tx_hash
        self.hash = tx_hash
        self.web3 = web3
        self.timeout = timeout

    async def wait(self) -> Any:
        return await self.web3.eth.wait_for_transaction_receipt(self.hash, timeout=self.timeout)


class SynapsePayments:
    def __init__(self, synapse: Any):
        self.synapse = synapse
        self.service = synapse.payments

    async def wallet_balance(self) -> int:
        return await self.service.wallet_balance()

    async def balance(self) -> int:
        return await self.service.balance()

    async def account_info(self) -> Dict:
        info = await self.service.account_info()
        return {
            'available_funds': info.available_funds,
            'locked_funds': info.lockup_current,
            'total_funds': info.funds
        }

    async def deposit(self, amount: int) -> ChainTransaction:
        return ChainTransaction(self.synapse.web3, await self.service.deposit(amount))

    async def approve_service(self, service: str, rate_allowance: int,
                              lockup_allowance: int, max_lockup_period: int) -> ChainTransaction:
        tx_hash = await self.service.approve_service(
            service, rate_allowance, lockup_allowance, max_lockup_period
        )
        return ChainTransaction(self.synapse.web3, tx_hash)


class SynapseStorage:
    def __init__(self, synapse: Any, with_cdn: bool = True):
        self.synapse = synapse
        self.manager = synapse.storage
        self.with_cdn = with_cdn

    async def preflight_upload(self, size: int) -> Any:
        # Allowances are only checked when the payments service is passed in
        return await self.manager.preflight_upload(
            size, with_cdn=self.with_cdn, payments_service=self.synapse.payments
        )

    async def upload(self, data: bytes) -> Any:
        return await self.manager.upload(data, with_cdn=self.with_cdn)

    async def download(self, piece_cid: str) -> bytes:
        return await self.manager.download(piece_cid)

    async def get_storage_info(self) -> Dict:
        info = await self.manager.get_storage_info()
        return {
            'pricing': {
                'noCDN': _as_dict(info.pricing_no_cdn),
                'withCDN': _as_dict(info.pricing_with_cdn)
            },
            'providers': list(info.providers),
            'service_parameters': {'network': self.synapse.chain.name}
        }


class SynapseNetwork:
    """Exposes an AsyncSynapse client through the NetworkClient surface"""

    def __init__(self, synapse: Any, with_cdn: bool = True):
        self.synapse = synapse
        self.payments = SynapsePayments(synapse)
        self.storage = SynapseStorage(synapse, with_cdn)

    async def get_warm_storage_address(self) -> str:
        return self.synapse.chain.contracts.warm_storage


async def connect(options: StorageOptions) -> NetworkClient:
    """Create a Synapse SDK client from validated options"""
    try:
        sdk = importlib.import_module(SDK_MODULE)
    except ImportError as e:
        raise ConfigurationError(ERROR_MESSAGES['SDK_MISSING']) from e

    if options.authorization:
        logger.warning("RPC authorization tokens are not supported by the Synapse SDK, ignoring")
    logger.debug(f"Creating {SDK_MODULE} client for {options.network}")
    synapse = await sdk.AsyncSynapse.create(**options.sdk_kwargs())
    return SynapseNetwork(synapse, with_cdn=options.with_cdn)


def _as_dict(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    return value


def field(obj: Any, *names: str, default: Any = None) -> Any:
    """
    Read the first present attribute or key among names.
    SDK results come back as objects or dicts, in snake_case or camelCase.
    """
    if obj is None:
        return default
    for name in names:
        if isinstance(obj, Mapping):
            if name in obj and obj[name] is not None:
                return obj[name]
        else:
            value = getattr(obj, name, None)
            if value is not None:
                return value
    return default
