"""
Phone FTP client package.

This package contains a small command-line client for the FTP server
running on a phone, including:
- Remote directory listing
- Single file download and upload
- Recursive directory download
- Transfer progress display
- Configuration and utilities
"""

__version__ = '0.1.0'
