# File Hashing Module
"""
File hashing helpers including:
- Streaming and buffered SHA-256 of files
- Reference digest from the cryptography library
- Constant-time verification against an expected digest
"""

# Lazy imports to avoid RuntimeWarning when running module directly
def __getattr__(name):
    """Lazy import to avoid circular import issues when running module directly."""
    from . import file_hash
    return getattr(file_hash, name)

__all__ = [
    'compute_file_hash',
    'compute_file_hash_buffered',
    'reference_file_hash',
    'verify_file_hash',
    'get_file_info',
    'normalize_hex_digest',
    'DEFAULT_CHUNK_SIZE',
]
