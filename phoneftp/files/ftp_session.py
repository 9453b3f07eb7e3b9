"""
FTP session module.

This module wraps an ``aioftp.Client`` and exposes the handful of
operations the client commands need, together with progress tracking.
"""

import asyncio
from pathlib import Path, PurePosixPath
from typing import Callable, List, Optional

import aioftp

from phoneftp.common.constants import ProgressTypes
from phoneftp.common.exceptions import ConnectionFailedError
from phoneftp.common.protocol_definitions import ListingEntry, ProgressEvent
from phoneftp.utils.config import ClientConfig
from phoneftp.utils.logger import logger

ProgressHandler = Callable[[ProgressEvent], None]

# Errors that can surface from the network or the local file system while
# a session operation is running.
FTP_ERRORS = (aioftp.AIOFTPException, OSError, asyncio.TimeoutError)


class FtpSession:
    """Authenticated session against the configured FTP server."""

    def __init__(self, config: ClientConfig):
        self.config = config
        self.client: Optional[aioftp.Client] = None
        self._progress_handler: Optional[ProgressHandler] = None
        self._bytes_overall = 0

    @property
    def connected(self) -> bool:
        return self.client is not None

    async def connect(self):
        """Connect and log in, raising ConnectionFailedError on any failure."""
        host, port = self.config.host, self.config.port
        if not host:
            raise ConnectionFailedError("Failed to connect to FTP server: no host configured")

        client = aioftp.Client(ssl=True if self.config.secure else None)
        credentials = {}
        if self.config.user:
            credentials['user'] = self.config.user
        if self.config.password:
            credentials['password'] = self.config.password

        try:
            await client.connect(host, port)
            await client.login(**credentials)
        except FTP_ERRORS as e:
            client.close()
            logger.log_connection(host, port, False)
            raise ConnectionFailedError(f"Failed to connect to FTP server: {e}") from e

        logger.log_connection(host, port, True)
        self.client = client

    def _require_client(self) -> aioftp.Client:
        if not self.connected:
            raise ConnectionFailedError("Not connected to FTP server")
        return self.client

    def track_progress(self, handler: Optional[ProgressHandler] = None):
        """Attach a progress handler, or detach the current one when called without one.

        Attaching resets the overall byte counter.
        """
        self._progress_handler = handler
        self._bytes_overall = 0

    def _report(self, name: str, kind: str, transferred: int, block_length: int):
        self._bytes_overall += block_length
        if self._progress_handler is not None:
            self._progress_handler(ProgressEvent(
                name=name,
                type=kind,
                bytes=transferred,
                bytes_overall=self._bytes_overall,
            ))

    async def list(self, path: str = '') -> List[ListingEntry]:
        """List a remote directory, the working directory by default."""
        client = self._require_client()
        return [
            ListingEntry.from_info(PurePosixPath(item_path).name, info)
            async for item_path, info in client.list(path)
        ]

    async def download_to(self, local_path, remote_path: str):
        """Download a single remote file into ``local_path``."""
        client = self._require_client()
        local_path = Path(local_path)
        name = PurePosixPath(remote_path).name
        logger.log_transfer("Downloading", remote_path, str(local_path))

        received = 0
        opened = False
        try:
            async with client.download_stream(remote_path) as stream:
                with open(local_path, 'wb') as f:
                    opened = True
                    async for block in stream.iter_by_block(self.config.block_size):
                        f.write(block)
                        received += len(block)
                        self._report(name, ProgressTypes.DOWNLOAD, received, len(block))
        except Exception:
            # Do not leave a truncated file behind
            if opened:
                local_path.unlink(missing_ok=True)
            raise

    async def download_to_dir(self, local_dir, remote_dir: str):
        """Download the contents of ``remote_dir`` recursively into ``local_dir``."""
        client = self._require_client()
        local_dir = Path(local_dir)
        root = PurePosixPath(remote_dir)

        entries = [
            (PurePosixPath(item_path), info)
            async for item_path, info in client.list(remote_dir, recursive=True)
        ]
        for item_path, info in entries:
            try:
                relative = item_path.relative_to(root)
            except ValueError:
                relative = PurePosixPath(item_path.name)
            target = local_dir.joinpath(*relative.parts)

            if info.get('type') == 'dir':
                target.mkdir(parents=True, exist_ok=True)
            elif info.get('type') == 'file':
                target.parent.mkdir(parents=True, exist_ok=True)
                await self.download_to(target, str(item_path))
            else:
                logger.debug(f"Skipping {item_path} (type={info.get('type')})")

    async def upload_from(self, local_path, remote_path: str):
        """Upload a single local file to ``remote_path``."""
        client = self._require_client()
        local_path = Path(local_path)
        logger.log_transfer("Uploading", str(local_path), remote_path)

        sent = 0
        with open(local_path, 'rb') as f:
            async with client.upload_stream(remote_path) as stream:
                while True:
                    block = f.read(self.config.block_size)
                    if not block:
                        break
                    await stream.write(block)
                    sent += len(block)
                    self._report(local_path.name, ProgressTypes.UPLOAD, sent, len(block))

    async def close(self):
        """Close the session. Safe to call more than once."""
        if not self.connected:
            return
        client, self.client = self.client, None
        try:
            await client.quit()
        except FTP_ERRORS as e:
            logger.debug(f"QUIT failed, closing connection: {e}")
        finally:
            client.close()
