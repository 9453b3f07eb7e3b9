#!/usr/bin/env python3
"""
Unit tests for the aioftp adapter in phoneftp.files.ftp_session

aioftp.Client is replaced with an in-memory fake so the streaming,
progress accounting and directory mirroring can be checked offline.
"""

import tempfile
import unittest
from pathlib import Path, PurePosixPath
from unittest.mock import patch

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from phoneftp.common.exceptions import ConnectionFailedError
from phoneftp.common.protocol_definitions import FileKind
from phoneftp.files.ftp_session import FtpSession
from phoneftp.utils.config import ClientConfig


class FakeStream:
    def __init__(self, blocks=()):
        self.blocks = list(blocks)
        self.written = []

    async def iter_by_block(self, block_size):
        for block in self.blocks:
            if isinstance(block, Exception):
                raise block
            yield block

    async def write(self, data):
        self.written.append(data)


class FakeStreamContext:
    def __init__(self, stream, error=None):
        self.stream = stream
        self.error = error

    async def __aenter__(self):
        if self.error:
            raise self.error
        return self.stream

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeFtpClient:
    """Stand-in for aioftp.Client."""

    def __init__(self, *args, **kwargs):
        self.kwargs = kwargs
        self.listing = []
        self.files = {}
        self.uploads = {}
        self.connect_error = None
        self.quit_called = False
        self.closed = False
        self.list_calls = []

    async def connect(self, host, port):
        if self.connect_error:
            raise self.connect_error
        self.address = (host, port)

    async def login(self, **credentials):
        self.credentials = credentials

    def list(self, path='', recursive=False):
        self.list_calls.append((path, recursive))

        async def entries():
            for item in self.listing:
                yield item
        return entries()

    def download_stream(self, path):
        if path not in self.files:
            return FakeStreamContext(None, ConnectionResetError("gone"))
        return FakeStreamContext(FakeStream(self.files[path]))

    def upload_stream(self, path):
        stream = FakeStream()
        self.uploads[path] = stream
        return FakeStreamContext(stream)

    async def quit(self):
        self.quit_called = True

    def close(self):
        self.closed = True


class FtpSessionTestCase(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.config = ClientConfig(host="phone.local", user="me", password="secret")
        self.config.block_size = 4
        self.fake = FakeFtpClient()

        patcher = patch('aioftp.Client', return_value=self.fake)
        self.client_cls = patcher.start()
        self.addCleanup(patcher.stop)

        logger_patcher = patch('phoneftp.files.ftp_session.logger')
        logger_patcher.start()
        self.addCleanup(logger_patcher.stop)

        self.session = FtpSession(self.config)
        self.events = []

    def tearDown(self):
        self._tmp.cleanup()


class TestConnect(FtpSessionTestCase):
    """Test cases for connecting and closing."""

    async def test_connect_and_login(self):
        """Test that the configured host, port and credentials are used."""
        await self.session.connect()

        self.assertTrue(self.session.connected)
        self.assertEqual(self.fake.address, ("phone.local", 2221))
        self.assertEqual(self.fake.credentials, {"user": "me", "password": "secret"})
        self.client_cls.assert_called_once_with(ssl=None)

    async def test_anonymous_when_no_credentials(self):
        """Test that missing credentials fall back to the library defaults."""
        self.config.user = None
        self.config.password = None

        await self.session.connect()

        self.assertEqual(self.fake.credentials, {})

    async def test_connect_failure_raises(self):
        """Test that a refused connection becomes ConnectionFailedError."""
        self.fake.connect_error = ConnectionRefusedError("refused")

        with self.assertRaises(ConnectionFailedError):
            await self.session.connect()

        self.assertFalse(self.session.connected)
        self.assertTrue(self.fake.closed)

    async def test_missing_host_raises(self):
        """Test that an unset host fails without touching the network."""
        self.config.host = None

        with self.assertRaises(ConnectionFailedError):
            await self.session.connect()
        self.client_cls.assert_not_called()

    async def test_close_is_idempotent(self):
        """Test that close quits once and can be called again."""
        await self.session.connect()

        await self.session.close()
        await self.session.close()

        self.assertTrue(self.fake.quit_called)
        self.assertTrue(self.fake.closed)
        self.assertFalse(self.session.connected)

    async def test_operations_require_connection(self):
        """Test that using a closed session is a connection error."""
        with self.assertRaises(ConnectionFailedError):
            await self.session.list()


class TestList(FtpSessionTestCase):
    """Test cases for remote listing."""

    async def test_entries_are_converted(self):
        """Test that aioftp facts become listing entries in server order."""
        self.fake.listing = [
            (PurePosixPath("b.txt"), {"type": "file", "size": "1500", "modify": "20240102030405"}),
            (PurePosixPath("DCIM"), {"type": "dir", "modify": "20240101000000"}),
            (PurePosixPath("link"), {"type": "link", "size": "bogus"}),
        ]
        await self.session.connect()

        entries = await self.session.list()

        self.assertEqual([e.name for e in entries], ["b.txt", "DCIM", "link"])
        self.assertEqual([e.kind for e in entries], [FileKind.FILE, FileKind.DIRECTORY, FileKind.UNKNOWN])
        self.assertEqual([e.size for e in entries], [1500, 0, 0])
        self.assertEqual(entries[0].raw_modified_at, "20240102030405")
        self.assertEqual(self.fake.list_calls, [("", False)])


class TestTransfers(FtpSessionTestCase):
    """Test cases for streamed transfers and progress."""

    async def asyncSetUp(self):
        await self.session.connect()
        self.session.track_progress(self.events.append)

    async def test_download_writes_file_and_reports_progress(self):
        """Test that blocks are written and progress accumulates."""
        self.fake.files["/DCIM/a.jpg"] = [b"abcd", b"ef"]

        await self.session.download_to(self.tmp / "a.jpg", "/DCIM/a.jpg")

        self.assertEqual((self.tmp / "a.jpg").read_bytes(), b"abcdef")
        self.assertEqual([e.bytes_overall for e in self.events], [4, 6])
        self.assertEqual({e.name for e in self.events}, {"a.jpg"})
        self.assertEqual({e.type for e in self.events}, {"download"})

    async def test_download_failure_propagates(self):
        """Test that the adapter lets transfer errors through."""
        with self.assertRaises(ConnectionResetError):
            await self.session.download_to(self.tmp / "missing.jpg", "/missing.jpg")
        self.assertFalse((self.tmp / "missing.jpg").exists())

    async def test_partial_download_is_removed(self):
        """Test that a file cut off mid-stream is deleted and the error propagates."""
        self.fake.files["/DCIM/a.jpg"] = [b"abcd", ConnectionResetError("connection dropped")]

        with self.assertRaises(ConnectionResetError):
            await self.session.download_to(self.tmp / "a.jpg", "/DCIM/a.jpg")

        self.assertFalse((self.tmp / "a.jpg").exists())
        self.assertEqual([e.bytes_overall for e in self.events], [4])

    async def test_download_dir_mirrors_tree(self):
        """Test that a recursive listing is recreated locally."""
        self.fake.listing = [
            (PurePosixPath("/photos/a.jpg"), {"type": "file", "size": "3"}),
            (PurePosixPath("/photos/trip"), {"type": "dir"}),
            (PurePosixPath("/photos/trip/b.jpg"), {"type": "file", "size": "5"}),
            (PurePosixPath("/photos/empty"), {"type": "dir"}),
        ]
        self.fake.files["/photos/a.jpg"] = [b"abc"]
        self.fake.files["/photos/trip/b.jpg"] = [b"defg", b"h"]

        await self.session.download_to_dir(self.tmp, "/photos/")

        self.assertEqual(self.fake.list_calls, [("/photos/", True)])
        self.assertEqual((self.tmp / "a.jpg").read_bytes(), b"abc")
        self.assertEqual((self.tmp / "trip" / "b.jpg").read_bytes(), b"defgh")
        self.assertTrue((self.tmp / "empty").is_dir())
        # The overall counter spans every file of the directory
        self.assertEqual(self.events[-1].bytes_overall, 8)
        self.assertEqual(self.events[-1].bytes, 5)

    async def test_upload_streams_file(self):
        """Test that the local file is sent block by block."""
        local_file = self.tmp / "notes.txt"
        local_file.write_bytes(b"0123456789")

        await self.session.upload_from(local_file, "/notes.txt")

        self.assertEqual(b"".join(self.fake.uploads["/notes.txt"].written), b"0123456789")
        self.assertEqual([e.bytes_overall for e in self.events], [4, 8, 10])
        self.assertEqual({e.type for e in self.events}, {"upload"})

    async def test_detached_tracking_reports_nothing(self):
        """Test that no events are delivered after detaching."""
        self.session.track_progress()
        self.fake.files["/a.txt"] = [b"xyz"]

        await self.session.download_to(self.tmp / "a.txt", "/a.txt")

        self.assertEqual(self.events, [])


if __name__ == '__main__':
    unittest.main()
