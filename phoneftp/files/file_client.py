"""
File client module.

This module implements the list, download, downloadDir and upload commands
on top of an FtpSession.

Path problems are checked before anything is sent to the server and raise
ValidationError. Failures while a transfer is running are logged and
returned as a failed TransferResult.
"""

import posixpath
import sys
from pathlib import Path
from typing import Awaitable, Callable, Optional

from phoneftp.common.constants import DEFAULT_REMOTE_DIR, ICONS
from phoneftp.common.exceptions import ValidationError
from phoneftp.common.protocol_definitions import FileKind, TransferResult
from phoneftp.common.units import format_bytes
from phoneftp.files.ftp_session import FtpSession
from phoneftp.files.progress import make_reporter
from phoneftp.utils.logger import logger


def map_icon(kind) -> str:
    """Icon for a listing entry kind, the unknown icon for anything unexpected."""
    try:
        return ICONS[FileKind(kind)]
    except (ValueError, IndexError):
        return ICONS[FileKind.UNKNOWN]


def normalize_remote_dir(remote: str) -> str:
    """Force a remote directory path into ``/path/`` form."""
    if not remote.startswith('/'):
        remote = '/' + remote
    if not remote.endswith('/'):
        remote += '/'
    return remote


class FileClient:
    """Client-side file operations."""

    def __init__(self, session: FtpSession, downloads_dir: Path, output=None):
        self.session = session
        self.downloads_dir = Path(downloads_dir)
        self.output = output if output is not None else sys.stdout

    def _print(self, line: str):
        self.output.write(line + '\n')

    @staticmethod
    def _require_directory(local: Path):
        if not local.exists():
            raise ValidationError(f"Local path does not exist: {local}")
        if not local.is_dir():
            raise ValidationError("Local path must be a directory")

    async def _transfer(self, operation: str, delegate: Callable[[], Awaitable[None]]) -> TransferResult:
        """Run a delegated transfer with a fresh progress reporter attached."""
        self.session.track_progress(make_reporter(self.output))
        try:
            await delegate()
        except Exception as e:
            logger.log_error(operation, e)
            return TransferResult.failed(str(e) or e.__class__.__name__)
        finally:
            self.session.track_progress()
        return TransferResult.success()

    async def list_remote(self):
        """Print the remote working directory, one entry per line."""
        entries = await self.session.list()
        for entry in entries:
            value, unit = format_bytes(entry.size)
            self._print(f"{map_icon(entry.kind)} {entry.name} - {value} {unit}")

    async def download(self, remote: str, local: Optional[str] = None) -> TransferResult:
        """Download a single remote file into a local directory."""
        local_dir = Path(local) if local else self.downloads_dir
        self._require_directory(local_dir)

        name = posixpath.basename(remote)
        if not name:
            raise ValidationError("Only files can be downloaded")

        destination = local_dir / name
        return await self._transfer(
            "download", lambda: self.session.download_to(destination, remote))

    async def download_dir(self, remote: str, local: Optional[str] = None) -> TransferResult:
        """Download a remote directory recursively.

        The remote path is mirrored below the local directory, so
        ``sub/dir`` lands in ``<local>/sub/dir/``.
        """
        local_dir = Path(local) if local else self.downloads_dir
        self._require_directory(local_dir)

        remote = normalize_remote_dir(remote)
        destination = local_dir.joinpath(*[part for part in remote.split('/') if part])
        destination.mkdir(parents=True, exist_ok=True)

        return await self._transfer(
            "downloadDir", lambda: self.session.download_to_dir(destination, remote))

    async def upload(self, local: str, remote: Optional[str] = None) -> TransferResult:
        """Upload a single local file into a remote directory."""
        local_path = Path(local)
        if not local_path.exists():
            raise ValidationError(f"Local path does not exist: {local}")
        if local_path.is_dir():
            raise ValidationError("Local path must be a file")

        destination = posixpath.join(remote or DEFAULT_REMOTE_DIR, local_path.name)
        return await self._transfer(
            "upload", lambda: self.session.upload_from(local_path, destination))
