"""
File Hashing Module

Computes SHA-256 digests of files with:
- Streaming mode (64-byte blocks, file never fully loaded)
- Buffered mode (whole file read, padded in memory)
- Reference digest via the cryptography library for cross-checking
- Constant-time comparison against an expected digest

Unreadable files raise InputSourceUnavailable instead of hashing as empty.
"""

import os
import hmac
import logging
from typing import Dict, Any

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.backends import default_backend

from ..core_crypto.constants import HEX_DIGEST_LENGTH
from ..core_crypto.sha256 import hash_bytes
from ..core_crypto.stream import FileChunkReader, InputSourceUnavailable, hash_stream


logger = logging.getLogger(__name__)

# Chunk size for reference hashing (1 MB default)
DEFAULT_CHUNK_SIZE = 1024 * 1024  # 1 MB

_HEX_DIGITS = frozenset('0123456789abcdef')


def compute_file_hash(file_path: str) -> str:
    """
    Compute SHA-256 hash of a file (streaming).

    Args:
        file_path: Path to file

    Returns:
        64-character hex digest

    Raises:
        InputSourceUnavailable: If the file cannot be opened or read
    """
    with FileChunkReader.open(file_path) as reader:
        digest = hash_stream(reader)
    logger.debug("Streamed hash of %s: %s", file_path, digest)
    return digest


def compute_file_hash_buffered(file_path: str) -> str:
    """
    Compute SHA-256 hash of a file by reading it fully into memory.

    Raises:
        InputSourceUnavailable: If the file cannot be opened or read
    """
    try:
        with open(file_path, 'rb') as f:
            data = f.read()
    except OSError as exc:
        raise InputSourceUnavailable(str(file_path), exc) from exc

    digest = hash_bytes(data)
    logger.debug("Buffered hash of %s (%d bytes): %s", file_path, len(data), digest)
    return digest


def reference_file_hash(file_path: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    """
    Compute SHA-256 of a file with the cryptography library.

    Independent of this package's own implementation; used to cross-check it.
    """
    digest = hashes.Hash(hashes.SHA256(), backend=default_backend())
    try:
        with open(file_path, 'rb') as f:
            while chunk := f.read(chunk_size):
                digest.update(chunk)
    except OSError as exc:
        raise InputSourceUnavailable(str(file_path), exc) from exc
    return digest.finalize().hex()


def normalize_hex_digest(expected_hex: str) -> str:
    """Lowercase and validate a 64-character hex digest."""
    normalized = expected_hex.strip().lower()
    if len(normalized) != HEX_DIGEST_LENGTH or not set(normalized) <= _HEX_DIGITS:
        raise ValueError(
            f"Expected digest must be {HEX_DIGEST_LENGTH} hex characters"
        )
    return normalized


def verify_file_hash(file_path: str, expected_hex: str) -> bool:
    """
    Verify a file against an expected SHA-256 digest (constant-time).

    Args:
        file_path: Path to file
        expected_hex: Expected 64-character hex digest (case-insensitive)

    Returns:
        True if the digests match

    Raises:
        ValueError: If expected_hex is not a valid digest
        InputSourceUnavailable: If the file cannot be read
    """
    expected = normalize_hex_digest(expected_hex)
    computed = compute_file_hash(file_path)
    return hmac.compare_digest(computed, expected)


def get_file_info(file_path: str) -> Dict[str, Any]:
    """
    Hash a file every available way and report whether they agree.

    Returns:
        Dict with size, stream/buffered/reference digests and a
        'consistent' flag
    """
    try:
        size = os.path.getsize(file_path)
    except OSError as exc:
        raise InputSourceUnavailable(str(file_path), exc) from exc

    stream_hash = compute_file_hash(file_path)
    buffered_hash = compute_file_hash_buffered(file_path)
    reference_hash = reference_file_hash(file_path)

    consistent = stream_hash == buffered_hash == reference_hash
    if not consistent:
        logger.warning("Digest mismatch for %s", file_path)

    return {
        'path': str(file_path),
        'size': size,
        'stream_hash': stream_hash,
        'buffered_hash': buffered_hash,
        'reference_hash': reference_hash,
        'consistent': consistent,
    }
