"""
File transfer module for client-side file operations.

Handles:
- Remote directory listing
- File downloads from the phone
- File uploads to the phone
- File transfer progress tracking
"""
