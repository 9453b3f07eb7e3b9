"""
Client configuration module.

This module handles the connection and transfer settings of the client.
"""

import os
from pathlib import Path
from typing import Mapping, Optional

from phoneftp.common.constants import (
    CHUNK_SIZE, DEFAULT_PORT, DEFAULT_SECURE, DOWNLOAD_DIR,
    ENV_HOST, ENV_LOG_LEVEL, ENV_PASS, ENV_USER,
)


class ClientConfig:
    """Client configuration class."""

    def __init__(self, host: Optional[str] = None, user: Optional[str] = None,
                 password: Optional[str] = None, port: int = DEFAULT_PORT,
                 secure: bool = DEFAULT_SECURE, downloads_dir: Optional[Path] = None,
                 log_level: str = 'INFO'):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.secure = secure

        # File transfer settings
        self.downloads_dir = Path(downloads_dir) if downloads_dir else Path.home() / DOWNLOAD_DIR
        self.block_size = CHUNK_SIZE

        self.log_level = log_level

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'ClientConfig':
        """Build the configuration from the process environment."""
        environ = os.environ if environ is None else environ
        return cls(
            host=environ.get(ENV_HOST),
            user=environ.get(ENV_USER),
            password=environ.get(ENV_PASS),
            log_level=environ.get(ENV_LOG_LEVEL, 'INFO'),
        )
