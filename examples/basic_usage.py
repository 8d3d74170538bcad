#!/usr/bin/env python3
"""
Basic usage example for filstore

Needs FILSTORE_PRIVATE_KEY set to a funded Calibration wallet.
Set PINATA_JWT as well to get an IPFS gateway URL for each upload.
"""
import asyncio
import sys
from pathlib import Path
from loguru import logger
from filstore import Blob, StorageOptions, create_file_storage


async def main():
    options = StorageOptions.from_env()
    storage = await create_file_storage(options)

    async with storage:
        # Fund the payments contract once per wallet
        # await storage.setup_wallet(deposit_amount=10)

        info = await storage.get_storage_info()
        print(f"Available funds: {info.account_info.available_funds} USDFC")
        print(f"Approved providers: {info.storage_info.providers}")

        # Upload JSON
        result = await storage.upload_json({'message': 'hello from filstore'}, 'my-data.json')
        print(f"JSON uploaded! PieceCID: {result.piece_cid}")

        document = await storage.download_json(result.piece_cid)
        print(f"Downloaded JSON: {document}")

        # Upload an image if one was given
        if len(sys.argv) > 1:
            image = Blob.from_path(Path(sys.argv[1]))
            image_result = await storage.upload_image(image)
            print(f"Image uploaded! PieceCID: {image_result.piece_cid} ({image_result.type})")
            if image_result.gateway_url:
                print(f"Gateway: {image_result.gateway_url}")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except Exception as e:
        logger.error(f"Example failed: {e}")
        sys.exit(1)
