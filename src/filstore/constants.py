# Size Limits
MIN_FILE_SIZE = 1
MAX_FILE_SIZE = 200 * 1024 * 1024  # 200 MiB

# Chain Units
TOKEN_DECIMALS = 18
EPOCHS_PER_DAY = 2880  # 30 second epochs

# Networks
DEFAULT_NETWORK = 'calibration'
NETWORKS = ('mainnet', 'calibration')
RPC_URLS = {
    'mainnet': 'https://api.node.glif.io/rpc/v1',
    'calibration': 'https://api.calibration.node.glif.io/rpc/v1'
}

# Pinning
PINATA_PIN_BY_HASH_URL = 'https://api.pinata.cloud/pinning/pinByHash'
PINATA_JWT_ENV = 'PINATA_JWT'
IPFS_GATEWAY_URL = 'https://ipfs.io/ipfs/{cid}'

# Defaults
DEFAULT_PIN_NAME = 'file'
DEFAULT_JSON_FILENAME = 'data.json'
DEFAULT_IMAGE_TYPE = 'image/unknown'
DEFAULT_DEPOSIT = 10
DEFAULT_RATE_ALLOWANCE = 10
DEFAULT_LOCKUP_ALLOWANCE = 1000
DEFAULT_MAX_LOCKUP_DAYS = 30

# Download shapes
RETURN_SHAPES = ('uint8array', 'blob', 'text', 'json')

# Error Messages
ERROR_MESSAGES = {
    'NOT_INITIALIZED': 'FileStorage not initialized. Call initialize() first.',
    'MISSING_CREDENTIALS': 'Must provide either private_key or provider',
    'UNKNOWN_NETWORK': 'Unknown network {network!r}, expected one of: mainnet, calibration',
    'UNSUPPORTED_TYPE': 'Unsupported file type.',
    'NOT_AN_IMAGE': 'Image must be a File or Blob object',
    'FILE_TOO_SMALL': 'File must be at least 1 byte',
    'FILE_TOO_LARGE': 'File must be smaller than 200 MiB',
    'INSUFFICIENT_ALLOWANCE': 'Insufficient allowance for upload. Please setup wallet first.',
    'SDK_MISSING': 'The Synapse SDK is not installed. Install it with: pip install "filstore[sdk]"',
    'PROVIDER_UNSUPPORTED': 'The Synapse SDK needs a private_key; pass a network_factory to use an external provider'
}
