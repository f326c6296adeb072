"""
Unit tests for the file hashing module.

Tests:
- Streaming and buffered file digests
- Cross-check against the cryptography library
- Expected-digest verification
- Unreadable files
"""

import hashlib
import os
import tempfile

import pytest
from sha256kit.core_crypto.stream import InputSourceUnavailable
from sha256kit.files.file_hash import (
    compute_file_hash, compute_file_hash_buffered, reference_file_hash,
    verify_file_hash, get_file_info, normalize_hex_digest,
)


ABC_DIGEST = "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"


@pytest.fixture
def temp_file():
    """Create a temporary file with content spanning several blocks."""
    content = b"Hello, this is a test file for hashing!\n" * 50
    fd, path = tempfile.mkstemp()
    with os.fdopen(fd, 'wb') as f:
        f.write(content)
    yield path, content
    os.remove(path)


class TestComputeFileHash:
    """Tests for file digests."""

    def test_stream_hash(self, temp_file):
        path, content = temp_file
        assert compute_file_hash(path) == hashlib.sha256(content).hexdigest()

    def test_buffered_hash(self, temp_file):
        path, content = temp_file
        assert compute_file_hash_buffered(path) == hashlib.sha256(content).hexdigest()

    def test_reference_hash(self, temp_file):
        """The cryptography library agrees with our implementation."""
        path, _ = temp_file
        assert reference_file_hash(path) == compute_file_hash(path)

    def test_reference_small_chunks(self, temp_file):
        path, content = temp_file
        assert reference_file_hash(path, chunk_size=7) == hashlib.sha256(content).hexdigest()

    def test_empty_file(self, tmp_path):
        """An empty file hashes as the empty message."""
        path = tmp_path / "empty"
        path.write_bytes(b"")
        expected = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
        assert compute_file_hash(str(path)) == expected
        assert compute_file_hash_buffered(str(path)) == expected

    @pytest.mark.parametrize("length", [55, 56, 64])
    def test_boundary_sizes(self, tmp_path, length):
        path = tmp_path / f"boundary_{length}"
        path.write_bytes(b"\xa5" * length)
        assert compute_file_hash(str(path)) == compute_file_hash_buffered(str(path))

    def test_missing_file_stream(self, tmp_path):
        """Missing files raise instead of hashing as empty."""
        with pytest.raises(InputSourceUnavailable):
            compute_file_hash(str(tmp_path / "missing.txt"))

    def test_missing_file_buffered(self, tmp_path):
        with pytest.raises(InputSourceUnavailable):
            compute_file_hash_buffered(str(tmp_path / "missing.txt"))

    def test_missing_file_reference(self, tmp_path):
        with pytest.raises(InputSourceUnavailable):
            reference_file_hash(str(tmp_path / "missing.txt"))


class TestVerifyFileHash:
    """Tests for expected-digest verification."""

    def test_matching_digest(self, tmp_path):
        path = tmp_path / "abc.txt"
        path.write_bytes(b"abc")
        assert verify_file_hash(str(path), ABC_DIGEST)

    def test_uppercase_digest_accepted(self, tmp_path):
        path = tmp_path / "abc.txt"
        path.write_bytes(b"abc")
        assert verify_file_hash(str(path), ABC_DIGEST.upper())

    def test_wrong_digest(self, tmp_path):
        path = tmp_path / "abd.txt"
        path.write_bytes(b"abd")
        assert not verify_file_hash(str(path), ABC_DIGEST)

    @pytest.mark.parametrize("bad", ["", "abc", ABC_DIGEST[:-1], "g" * 64, ABC_DIGEST + "00"])
    def test_malformed_digest(self, bad):
        with pytest.raises(ValueError):
            normalize_hex_digest(bad)


class TestFileInfo:
    """Tests for get_file_info."""

    def test_consistent(self, temp_file):
        path, content = temp_file
        info = get_file_info(path)
        assert info['size'] == len(content)
        assert info['consistent'] is True
        assert info['stream_hash'] == info['buffered_hash'] == info['reference_hash']

    def test_missing(self, tmp_path):
        with pytest.raises(InputSourceUnavailable):
            get_file_info(str(tmp_path / "missing"))
