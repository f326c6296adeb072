# sha256kit
"""
SHA-256 from scratch, in buffer and streaming modes.

    >>> from sha256kit import hash_bytes
    >>> hash_bytes(b"abc")
    'ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad'
"""

from .core_crypto.sha256 import hash_bytes, sha256, sha256_hex, sha256_string
from .core_crypto.stream import (
    hash_stream, BytesChunkReader, FileChunkReader, InputSourceUnavailable
)

__version__ = "1.0.0"

__all__ = [
    'hash_bytes',
    'hash_stream',
    'sha256',
    'sha256_hex',
    'sha256_string',
    'BytesChunkReader',
    'FileChunkReader',
    'InputSourceUnavailable',
]
