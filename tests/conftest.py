import hashlib
import pytest
from loguru import logger
from filstore import FileStorage, PinningClient


class FakeTransaction:
    def __init__(self, tx_hash):
        self.hash = tx_hash
        self.confirmed = False

    async def wait(self):
        self.confirmed = True
        return {'status': 1}


class FakePayments:
    def __init__(self):
        self.calls = []
        self.wallet = 50 * 10**18
        self.deposited = 0
        self.failures = {}

    def _maybe_fail(self, name):
        if name in self.failures:
            raise self.failures[name]

    async def wallet_balance(self):
        self._maybe_fail('wallet_balance')
        return self.wallet

    async def balance(self):
        self._maybe_fail('balance')
        return self.deposited

    async def account_info(self):
        self._maybe_fail('account_info')
        return {
            'availableFunds': self.deposited,
            'lockedFunds': 0,
            'totalFunds': self.deposited
        }

    async def deposit(self, amount):
        self._maybe_fail('deposit')
        self.calls.append(('deposit', amount))
        self.deposited += amount
        return FakeTransaction('0xdeposit')

    async def approve_service(self, service, rate_allowance, lockup_allowance, max_lockup_period):
        self._maybe_fail('approve_service')
        self.calls.append(('approve_service', service, rate_allowance, lockup_allowance, max_lockup_period))
        return FakeTransaction('0xapprove')


class FakeStorage:
    def __init__(self):
        self.pieces = {}
        self.sufficient = True
        self.failures = {}

    def _maybe_fail(self, name):
        if name in self.failures:
            raise self.failures[name]

    async def preflight_upload(self, size):
        return {'allowanceCheck': {'sufficient': self.sufficient}}

    async def upload(self, data):
        self._maybe_fail('upload')
        piece_cid = 'bafkzcib' + hashlib.sha256(data).hexdigest()[:32]
        self.pieces[piece_cid] = bytes(data)
        return {'pieceCid': piece_cid, 'size': len(data)}

    async def download(self, piece_cid):
        self._maybe_fail('download')
        if piece_cid not in self.pieces:
            raise Exception(f"Piece {piece_cid} not found on any provider")
        return self.pieces[piece_cid]

    async def get_storage_info(self):
        self._maybe_fail('get_storage_info')
        return {
            'pricing': {'noCDN': {'perTiBPerMonth': 2 * 10**18}},
            'providers': [{'id': 1}, {'id': 2}],
            'serviceParameters': {'network': 'calibration'}
        }


class FakeNetwork:
    def __init__(self):
        self.payments = FakePayments()
        self.storage = FakeStorage()

    async def get_warm_storage_address(self):
        return '0xWarmStorage'


class FakePinning(PinningClient):
    def __init__(self, gateway_url=None):
        super().__init__()
        self.gateway_url = gateway_url
        self.pinned = []

    async def pin(self, cid, filename='file'):
        self.pinned.append((cid, filename))
        return self.gateway_url


@pytest.fixture
def network():
    return FakeNetwork()


@pytest.fixture
def network_factory(network):
    async def factory(options):
        factory.options = options
        return network
    return factory


@pytest.fixture
def pinning():
    return FakePinning()


@pytest.fixture
def storage(network_factory, pinning):
    return FileStorage(network_factory=network_factory, pinning=pinning)


@pytest.fixture
def log_messages():
    messages = []
    handler_id = logger.add(lambda message: messages.append(message.record['message']), level='DEBUG')
    yield messages
    logger.remove(handler_id)
