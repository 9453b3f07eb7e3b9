"""
Shared constants for the phone FTP client.

This module contains all constants used across the dispatcher, the transfer
operations and the FTP session.
"""

# Network Configuration
DEFAULT_PORT = 2221
DEFAULT_SECURE = False

# Environment
ENV_HOST = 'PHONE_HOST'
ENV_USER = 'PHONE_USER'
ENV_PASS = 'PHONE_PASS'
ENV_LOG_LEVEL = 'PHONE_FTP_LOG_LEVEL'

# Buffer Sizes
CHUNK_SIZE = 8192

# File Transfer
DOWNLOAD_DIR = 'Downloads'
DEFAULT_REMOTE_DIR = '/'

# Byte units (decimal scaling)
BYTE_UNITS = ('B', 'KB', 'MB', 'GB', 'TB')
UNIT_STEP = 1000

# Terminal control sequences
CURSOR_UP = '\x1b[1A'
CLEAR_SCREEN_DOWN = '\x1b[0J'

# Listing icons (Nerd Font), indexed by FileKind
ICONS = (
    '\ueb32',  # question mark
    '\uf15b',  # file
    '\uf4d4',  # directory
)

# Exit statuses
EXIT_OK = 0
EXIT_FAILURE = 1

HELP_TEXT = """commands:
   - list - list remote
   - download <remote> [local] - download file, default local is ~/Downloads
   - downloadDir <remote> [local] - download directory, default local is ~/Downloads
   - upload <local> [remote] - upload file
"""


class ProgressTypes:
    DOWNLOAD = 'download'
    UPLOAD = 'upload'
