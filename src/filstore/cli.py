#!/usr/bin/env python3
import asyncio
import json
import os
import sys
import click
from loguru import logger
from .config import StorageOptions
from .constants import (
    NETWORKS, DEFAULT_NETWORK, RETURN_SHAPES, DEFAULT_DEPOSIT,
    DEFAULT_RATE_ALLOWANCE, DEFAULT_LOCKUP_ALLOWANCE, DEFAULT_MAX_LOCKUP_DAYS
)
from .network import connect
from .payload import Blob, JsonPayload
from .storage import create_file_storage


def connection_options(f):
    f = click.option('--authorization', envvar='FILSTORE_AUTHORIZATION', help='RPC authorization token')(f)
    f = click.option('--network', envvar='FILSTORE_NETWORK', default=DEFAULT_NETWORK,
                     type=click.Choice(NETWORKS), show_default=True)(f)
    f = click.option('--private-key', envvar='FILSTORE_PRIVATE_KEY', help='Wallet private key (hex)')(f)
    return f


def run(ctx, coro):
    """Run a command coroutine, turning failures into exit code 1"""
    try:
        asyncio.run(coro)
    except Exception as e:
        click.echo(f"✗ {e}", err=True)
        ctx.exit(1)


async def open_storage(ctx, private_key, network, authorization):
    options = StorageOptions(private_key=private_key, network=network, authorization=authorization)
    return await create_file_storage(options, network_factory=ctx.obj['network_factory'])


@click.group()
@click.pass_context
def cli(ctx):
    """filstore CLI - File storage on Filecoin with optional IPFS pinning"""
    ctx.ensure_object(dict)
    ctx.obj.setdefault('network_factory', connect)


@cli.command()
@click.argument('file_path', type=click.Path(exists=True, dir_okay=False))
@click.option('--name', help='Filename recorded with the pin (defaults to the file name)')
@connection_options
@click.pass_context
def upload(ctx, file_path, name, private_key, network, authorization):
    """Upload a file"""
    async def _upload():
        storage = await open_storage(ctx, private_key, network, authorization)
        async with storage:
            click.echo(f"Uploading {file_path}...")
            result = await storage.upload_file(Blob.from_path(file_path), name)
            click.echo("✓ File uploaded successfully!")
            click.echo(f"  PieceCID: {result.piece_cid}")
            click.echo(f"  Size: {result.size} bytes")
            if result.gateway_url:
                click.echo(f"  Gateway: {result.gateway_url}")

    run(ctx, _upload())


@cli.command('upload-json')
@click.argument('file_path', type=click.Path(exists=True, dir_okay=False))
@connection_options
@click.pass_context
def upload_json(ctx, file_path, private_key, network, authorization):
    """Validate and upload a JSON document"""
    with open(file_path, 'r', encoding='utf-8') as f:
        try:
            document = json.load(f)
        except json.JSONDecodeError as e:
            raise click.BadParameter(f"not valid JSON: {e}", param_hint='FILE_PATH')

    async def _upload():
        storage = await open_storage(ctx, private_key, network, authorization)
        async with storage:
            # JsonPayload keeps a top-level string quoted
            result = await storage.upload_file(JsonPayload(document), os.path.basename(file_path))
            click.echo("✓ JSON uploaded successfully!")
            click.echo(f"  PieceCID: {result.piece_cid}")
            click.echo(f"  Size: {result.size} bytes")

    run(ctx, _upload())


@cli.command()
@click.argument('piece_cid')
@click.option('--output', '-o', type=click.Path(dir_okay=False, writable=True), help='Output file path')
@click.option('--as', 'return_as', type=click.Choice(RETURN_SHAPES), default='uint8array',
              help='How to decode the content when printing')
@connection_options
@click.pass_context
def download(ctx, piece_cid, output, return_as, private_key, network, authorization):
    """Download a piece by its PieceCID"""
    async def _download():
        storage = await open_storage(ctx, private_key, network, authorization)
        async with storage:
            click.echo(f"Downloading {piece_cid}...", err=True)
            if output:
                data = await storage.download_file(piece_cid)
                with open(output, 'wb') as f:
                    f.write(data)
                click.echo(f"✓ Downloaded to {output} ({len(data)} bytes)")
                return

            content = await storage.download_file(piece_cid, return_as=return_as)
            if return_as == 'json':
                click.echo(json.dumps(content, indent=2))
            elif return_as == 'text':
                click.echo(content)
            else:
                data = content.data if isinstance(content, Blob) else content
                click.echo(f"✓ Downloaded {len(data)} bytes")

    run(ctx, _download())


@cli.command()
@click.argument('piece_cid')
@connection_options
@click.pass_context
def exists(ctx, piece_cid, private_key, network, authorization):
    """Check whether a piece can be retrieved"""
    async def _exists():
        storage = await open_storage(ctx, private_key, network, authorization)
        async with storage:
            found = await storage.check_file_exists(piece_cid)
            click.echo(f"{piece_cid}: {'found' if found else 'not found'}")

    run(ctx, _exists())


@cli.command()
@connection_options
@click.pass_context
def info(ctx, private_key, network, authorization):
    """Show wallet balance, account funds and provider info"""
    async def _info():
        storage = await open_storage(ctx, private_key, network, authorization)
        async with storage:
            result = await storage.get_storage_info()
            click.echo(json.dumps(result.to_dict(), indent=2, default=str))

    run(ctx, _info())


@cli.command('setup-wallet')
@click.option('--deposit', default=DEFAULT_DEPOSIT, show_default=True, help='USDFC to deposit')
@click.option('--rate', default=DEFAULT_RATE_ALLOWANCE, show_default=True, help='Rate allowance per epoch (USDFC)')
@click.option('--lockup', default=DEFAULT_LOCKUP_ALLOWANCE, show_default=True, help='Total lockup allowance (USDFC)')
@click.option('--days', default=DEFAULT_MAX_LOCKUP_DAYS, show_default=True, help='Max lockup period in days')
@connection_options
@click.pass_context
def setup_wallet(ctx, deposit, rate, lockup, days, private_key, network, authorization):
    """Deposit funds and approve the warm storage service"""
    async def _setup():
        storage = await open_storage(ctx, private_key, network, authorization)
        async with storage:
            click.echo(f"Depositing {deposit} USDFC and approving service...")
            await storage.setup_wallet(deposit, rate, lockup, days)
            click.echo("✓ Wallet ready for uploads")

    run(ctx, _setup())


def main():
    logger.remove()
    logger.add(sys.stderr, level=os.getenv('FILSTORE_LOG_LEVEL', 'WARNING'))
    cli(obj={})


if __name__ == '__main__':
    main()
