"""
Shared definitions for the phone FTP client.

Handles:
- Constants and help text
- Listing, progress and transfer result records
- Error taxonomy
- Byte unit formatting
"""
