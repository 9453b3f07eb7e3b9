#!/usr/bin/env python3
"""
Phone FTP Client - Main Entry Point

Usage:
    python main_client.py <command> [args]

Commands:
    list                              list the remote directory
    download <remote> [local]         download a file (default local: ~/Downloads)
    downloadDir <remote> [local]      download a directory (default local: ~/Downloads)
    upload <local> [remote]           upload a file (default remote: /)

Connection settings come from PHONE_HOST, PHONE_USER and PHONE_PASS.
"""

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from phoneftp.main_client import main


if __name__ == "__main__":
    main()
