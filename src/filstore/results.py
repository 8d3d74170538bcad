from dataclasses import dataclass, field
from typing import Dict, Optional
from .constants import DEFAULT_IMAGE_TYPE


@dataclass(frozen=True)
class UploadResult:
    piece_cid: str
    size: int
    timestamp: int  # ms since epoch
    filename: Optional[str] = None
    gateway_url: Optional[str] = None

    def to_dict(self) -> Dict:
        result = {
            'pieceCid': self.piece_cid,
            'size': self.size,
            'timestamp': self.timestamp
        }
        if self.filename:
            result['filename'] = self.filename
        if self.gateway_url:
            result['gatewayURL'] = self.gateway_url
        return result


@dataclass(frozen=True)
class ImageUploadResult(UploadResult):
    type: str = DEFAULT_IMAGE_TYPE

    def to_dict(self) -> Dict:
        result = super().to_dict()
        result['type'] = self.type
        return result


@dataclass(frozen=True)
class AccountInfo:
    available_funds: str = '0'
    locked_funds: str = '0'
    total_funds: str = '0'

    def to_dict(self) -> Dict:
        return {
            'availableFunds': self.available_funds,
            'lockedFunds': self.locked_funds,
            'totalFunds': self.total_funds
        }


@dataclass(frozen=True)
class ProviderSummary:
    pricing: Dict = field(default_factory=dict)
    providers: int = 0
    network: str = 'unknown'

    def to_dict(self) -> Dict:
        return {
            'pricing': self.pricing,
            'providers': self.providers,
            'network': self.network
        }


@dataclass(frozen=True)
class StorageInfo:
    """Snapshot of wallet balance, payment account funds and provider info"""
    balance: str = '0'
    account_info: AccountInfo = field(default_factory=AccountInfo)
    storage_info: ProviderSummary = field(default_factory=ProviderSummary)

    @classmethod
    def default(cls) -> 'StorageInfo':
        return cls()

    def to_dict(self) -> Dict:
        return {
            'balance': self.balance,
            'accountInfo': self.account_info.to_dict(),
            'storageInfo': self.storage_info.to_dict()
        }
