import os
from typing import Optional
import httpx
from loguru import logger
from .constants import (
    PINATA_PIN_BY_HASH_URL, PINATA_JWT_ENV, IPFS_GATEWAY_URL, DEFAULT_PIN_NAME
)


class PinningClient:
    """Pins uploaded pieces on Pinata so they are served by a public IPFS gateway"""

    def __init__(self, token: str = None, endpoint: str = PINATA_PIN_BY_HASH_URL,
                 transport: httpx.AsyncBaseTransport = None, timeout: float = 30.0):
        self.token = token
        self.endpoint = endpoint
        self.transport = transport
        self.timeout = timeout

    def resolve_token(self) -> Optional[str]:
        # Read per call so the env var can be set after construction
        return self.token or os.environ.get(PINATA_JWT_ENV) or None

    async def pin(self, cid: str, filename: str = DEFAULT_PIN_NAME) -> Optional[str]:
        """
        Pin cid by hash. Returns the gateway URL on success, None otherwise.
        Never raises: pinning is a side effect of upload, not part of it.
        """
        token = self.resolve_token()
        if not token:
            logger.warning(f"{PINATA_JWT_ENV} not set. Skipping pinning.")
            return None

        body = {
            'hashToPin': cid,
            'pinataMetadata': {
                'name': filename
            }
        }
        headers = {
            'Authorization': f"Bearer {token}",
            'Content-Type': 'application/json'
        }

        try:
            async with httpx.AsyncClient(transport=self.transport, timeout=self.timeout) as client:
                response = await client.post(self.endpoint, json=body, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"Pinning request failed: {e}")
            return None

        if response.is_success:
            logger.info(f"Pinned to Pinata: {cid}")
            return IPFS_GATEWAY_URL.format(cid=cid)

        logger.error(f"Pinning error ({response.status_code}): {response.text}")
        return None
