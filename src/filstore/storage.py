import asyncio
import json
import tempfile
import time
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union
from loguru import logger
from .config import StorageOptions
from .constants import (
    DEFAULT_DEPOSIT, DEFAULT_RATE_ALLOWANCE, DEFAULT_LOCKUP_ALLOWANCE,
    DEFAULT_MAX_LOCKUP_DAYS, DEFAULT_PIN_NAME, DEFAULT_JSON_FILENAME,
    DEFAULT_IMAGE_TYPE, ERROR_MESSAGES
)
from .errors import (
    NotInitializedError, UnsupportedInputError, InsufficientAllowanceError,
    is_not_found
)
from .fallible import or_default
from .network import NetworkClient, connect, field
from .payload import (
    Blob, BlobPayload, BytesPayload, TextPayload, JsonPayload, as_payload, check_size
)
from .pinning import PinningClient
from .results import UploadResult, ImageUploadResult, AccountInfo, ProviderSummary, StorageInfo
from .units import parse_units, format_units, days_to_epochs

NetworkFactory = Callable[[StorageOptions], Awaitable[NetworkClient]]


class FileStorage:
    def __init__(self, network_factory: NetworkFactory = connect,
                 pinning: PinningClient = None):
        self.network_factory = network_factory
        self.pinning = pinning or PinningClient()
        self.network: Optional[NetworkClient] = None
        self.options: Optional[StorageOptions] = None
        self.is_initialized = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def initialize(self, options: StorageOptions = None, **kwargs) -> bool:
        """
        Connect to the storage network.
        Accepts a StorageOptions or its fields as keyword arguments
        (private_key, provider, network, authorization, with_cdn).
        """
        if options is None:
            options = StorageOptions(**kwargs)
        options.validate()

        try:
            network = await self.network_factory(options)
        except Exception as e:
            logger.error(f"Failed to initialize FileStorage: {e}")
            raise

        self.network = network
        self.options = options
        self.is_initialized = True
        logger.info(f"FileStorage initialized on {options.network} network")
        return True

    async def close(self):
        self.network = None
        self.is_initialized = False

    def _require_network(self) -> NetworkClient:
        if not self.is_initialized or self.network is None:
            raise NotInitializedError()
        return self.network

    async def setup_wallet(self, deposit_amount=DEFAULT_DEPOSIT,
                           rate_allowance=DEFAULT_RATE_ALLOWANCE,
                           lockup_allowance=DEFAULT_LOCKUP_ALLOWANCE,
                           max_lockup_days: int = DEFAULT_MAX_LOCKUP_DAYS) -> bool:
        """
        Deposit USDFC into the payments contract and approve the warm storage
        service. Amounts are whole tokens, the lockup period is in days.
        A failed approval does not undo a confirmed deposit.
        """
        network = self._require_network()
        max_lockup_period = days_to_epochs(max_lockup_days)

        try:
            logger.info("Checking current balance...")
            wallet_balance = await network.payments.wallet_balance()
            logger.info(f"Wallet USDFC balance: {format_units(wallet_balance)}")

            logger.info(f"Depositing {deposit_amount} USDFC...")
            deposit_tx = await network.payments.deposit(parse_units(deposit_amount))
            logger.info(f"Deposit transaction: {deposit_tx.hash}")
            await deposit_tx.wait()
            logger.info("Deposit confirmed")

            logger.info("Approving Warm Storage service...")
            service_address = await network.get_warm_storage_address()
            approve_tx = await network.payments.approve_service(
                service_address,
                parse_units(rate_allowance),
                parse_units(lockup_allowance),
                max_lockup_period
            )
            logger.info(f"Service approval transaction: {approve_tx.hash}")
            await approve_tx.wait()
            logger.info("Service approval confirmed")

            available = await network.payments.balance()
            logger.info(f"Available balance in payments contract: {format_units(available)} USDFC")
        except Exception as e:
            logger.error(f"Wallet setup failed: {e}")
            raise

        return True

    async def upload_file(self, file: Any, filename: str = None) -> UploadResult:
        """
        Upload bytes, text, a JSON-serializable dict/list, a Blob or a payload
        variant. Pins the piece on Pinata when PINATA_JWT is set.
        """
        network = self._require_network()
        payload = as_payload(file)
        data = payload.to_bytes()
        filename = filename or payload.filename
        size = check_size(data)

        try:
            logger.info(f"Uploading {size} bytes...")
            preflight = await network.storage.preflight_upload(size)
            allowance = field(preflight, 'allowance_check', 'allowanceCheck')
            if not field(allowance, 'sufficient', default=False):
                raise InsufficientAllowanceError()

            uploaded = await network.storage.upload(data)
        except Exception as e:
            logger.error(f"Upload failed: {e}")
            raise

        piece_cid = uploaded if isinstance(uploaded, str) else field(uploaded, 'piece_cid', 'pieceCid')
        piece_cid = str(piece_cid)
        logger.info(f"Upload successful! PieceCID: {piece_cid}")

        gateway_url = await or_default(
            self.pinning.pin(piece_cid, filename or DEFAULT_PIN_NAME), None, 'Pinning'
        )
        if gateway_url:
            logger.info(f"Accessible at: {gateway_url}")

        return UploadResult(
            piece_cid=piece_cid,
            size=size,
            timestamp=int(time.time() * 1000),
            filename=filename,
            gateway_url=gateway_url
        )

    async def upload_bytes(self, data: bytes, filename: str = None) -> UploadResult:
        return await self.upload_file(BytesPayload(bytes(data), filename))

    async def upload_text(self, text: str, filename: str = None) -> UploadResult:
        return await self.upload_file(TextPayload(text, filename))

    async def upload_image(self, image: Blob) -> ImageUploadResult:
        if not isinstance(image, Blob):
            raise UnsupportedInputError(ERROR_MESSAGES['NOT_AN_IMAGE'])

        result = await self.upload_file(BlobPayload(image), image.name)
        return ImageUploadResult(
            piece_cid=result.piece_cid,
            size=result.size,
            timestamp=result.timestamp,
            filename=result.filename,
            gateway_url=result.gateway_url,
            type=image.type or DEFAULT_IMAGE_TYPE
        )

    async def upload_json(self, data: Union[Dict, List, str],
                          filename: str = DEFAULT_JSON_FILENAME) -> UploadResult:
        if isinstance(data, str):
            return await self.upload_file(TextPayload(data, filename))
        if isinstance(data, (dict, list)):
            return await self.upload_file(JsonPayload(data, filename))
        raise UnsupportedInputError()

    async def download_file(self, piece_cid: str, return_as: str = 'uint8array') -> Any:
        """
        Download a piece and return it as 'uint8array' (bytes, default),
        'blob' (Blob), 'text' (str) or 'json' (parsed value).
        """
        network = self._require_network()

        try:
            logger.info(f"Downloading file with PieceCID: {piece_cid}")
            data = bytes(await network.storage.download(piece_cid))

            if return_as == 'blob':
                return Blob(data)
            if return_as == 'text':
                return data.decode('utf-8')
            if return_as == 'json':
                return json.loads(data.decode('utf-8'))
            return data
        except Exception as e:
            logger.error(f"Download failed: {e}")
            raise

    async def download_json(self, piece_cid: str) -> Any:
        return await self.download_file(piece_cid, return_as='json')

    async def download_image(self, piece_cid: str, suffix: str = '') -> str:
        """
        Download a piece to a temp file and return its file:// URI.
        The file is left for the caller to remove.
        """
        try:
            blob = await self.download_file(piece_cid, return_as='blob')
            path = await asyncio.to_thread(_write_temp, blob.data, suffix)
        except Exception as e:
            logger.error(f"Image download failed: {e}")
            raise
        return path.as_uri()

    async def check_file_exists(self, piece_cid: str) -> bool:
        network = self._require_network()

        try:
            await network.storage.download(piece_cid)
        except Exception as e:
            if is_not_found(e):
                return False
            raise
        return True

    async def get_storage_info(self) -> StorageInfo:
        """
        Wallet balance, payment account funds and provider info.
        Each query falls back to defaults on failure; never raises once initialized.
        """
        network = self._require_network()

        try:
            balance, account, info = await asyncio.gather(
                or_default(network.payments.balance(), None, 'Balance query'),
                or_default(network.payments.account_info(), None, 'Account info query'),
                or_default(network.storage.get_storage_info(), None, 'Storage info query')
            )
            return StorageInfo(
                balance=_format_amount(balance),
                account_info=_account_info(account),
                storage_info=_provider_summary(info)
            )
        except Exception as e:
            logger.error(f"Failed to get storage info safely: {e}")
            return StorageInfo.default()


def _write_temp(data: bytes, suffix: str) -> Path:
    with tempfile.NamedTemporaryFile(prefix='filstore-', suffix=suffix, delete=False) as f:
        f.write(data)
    return Path(f.name).resolve()


def _format_amount(value: Any) -> str:
    return format_units(value) if value else '0'


def _account_info(account: Any) -> AccountInfo:
    if account is None:
        return AccountInfo()
    return AccountInfo(
        available_funds=_format_amount(field(account, 'available_funds', 'availableFunds')),
        locked_funds=_format_amount(field(account, 'locked_funds', 'lockedFunds')),
        total_funds=_format_amount(field(account, 'total_funds', 'totalFunds'))
    )


def _provider_summary(info: Any) -> ProviderSummary:
    if info is None:
        return ProviderSummary()
    providers = field(info, 'providers')
    params = field(info, 'service_parameters', 'serviceParameters')
    return ProviderSummary(
        pricing=field(info, 'pricing', default={}),
        providers=len(providers) if isinstance(providers, (list, tuple)) else 0,
        network=field(params, 'network', default='unknown')
    )


async def create_file_storage(options: StorageOptions = None,
                              network_factory: NetworkFactory = connect,
                              pinning: PinningClient = None, **kwargs) -> FileStorage:
    """Build and initialize a FileStorage in one step"""
    storage = FileStorage(network_factory=network_factory, pinning=pinning)
    await storage.initialize(options, **kwargs)
    return storage
