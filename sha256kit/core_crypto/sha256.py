"""
SHA-256 Hash Implementation (From Scratch)

Implements the SHA-256 cryptographic hash function as defined in FIPS 180-4.
This implementation avoids using hashlib and builds the algorithm from scratch.

Components:
- Padding: Pads message to multiple of 512 bits
- Word packing: 64-byte block to 16 big-endian words
- Message Schedule: Expands 16 words to 64 words
- Compression: 64 rounds of compression function
- Accumulation: Folds the round output into the digest state
- Output: 256-bit (32-byte) digest, rendered as 64 hex characters

Both the buffer hasher here and the stream hasher in ``stream.py`` feed
blocks through the same ``process_block`` function.
"""

import logging
from typing import List, Sequence, Tuple

from .constants import (
    H_INITIAL, K, MASK_32, MASK_64, BLOCK_SIZE, WORD_SIZE, SCHEDULE_LENGTH,
    ROUNDS, LENGTH_FIELD_SIZE, LENGTH_OFFSET, PADDING_MARKER,
)


logger = logging.getLogger(__name__)

State = Tuple[int, int, int, int, int, int, int, int]


def _right_rotate(value: int, amount: int) -> int:
    """Right rotate a 32-bit integer by the specified amount."""
    return ((value >> amount) | (value << (32 - amount))) & MASK_32


def _ch(x: int, y: int, z: int) -> int:
    """Choice function: if x then y else z (bitwise)."""
    return ((x & y) ^ (~x & z)) & MASK_32


def _maj(x: int, y: int, z: int) -> int:
    """Majority function: majority vote of bits."""
    return (x & y) ^ (x & z) ^ (y & z)


def _sigma0(x: int) -> int:
    """Lowercase sigma 0: used in message schedule."""
    return _right_rotate(x, 7) ^ _right_rotate(x, 18) ^ (x >> 3)


def _sigma1(x: int) -> int:
    """Lowercase sigma 1: used in message schedule."""
    return _right_rotate(x, 17) ^ _right_rotate(x, 19) ^ (x >> 10)


def _big_sigma0(x: int) -> int:
    """Uppercase Sigma 0: used in compression."""
    return _right_rotate(x, 2) ^ _right_rotate(x, 13) ^ _right_rotate(x, 22)


def _big_sigma1(x: int) -> int:
    """Uppercase Sigma 1: used in compression."""
    return _right_rotate(x, 6) ^ _right_rotate(x, 11) ^ _right_rotate(x, 25)


def length_field(byte_length: int) -> bytes:
    """
    Encode a message length as the 64-bit big-endian bit count.

    Lengths of 2**64 bits or more wrap modulo 2**64.
    """
    return ((byte_length * 8) & MASK_64).to_bytes(LENGTH_FIELD_SIZE, byteorder='big')


def pad_message(data: bytes) -> Tuple[bytes, int]:
    """
    Pad the message according to SHA-256 specification.

    Padding rules:
    1. Append bit '1' to message (0x80 byte)
    2. Append zeros until message length ≡ 448 (mod 512)
    3. Append original message length as 64-bit big-endian integer

    A message whose length is 56..63 (mod 64) has no room left for the
    length field after the 0x80 byte, so padding spills into an extra block.

    Args:
        data: The original message bytes

    Returns:
        Tuple of (padded message, block count); the padded length is a
        multiple of 64 bytes
    """
    original_length = len(data)

    # Append the bit '1' (0x80 = 10000000 in binary)
    padded = bytes(data) + PADDING_MARKER

    # Append zeros until length ≡ 448 mod 512 (56 mod 64 in bytes)
    # We need: (current_length + padding_zeros) % 64 == 56
    padding_length = (LENGTH_OFFSET - (len(padded) % BLOCK_SIZE)) % BLOCK_SIZE
    padded += b'\x00' * padding_length

    # Append the original length as 64-bit big-endian integer
    padded += length_field(original_length)

    block_count = len(padded) // BLOCK_SIZE
    logger.debug("Padded %d-byte message to %d block(s)", original_length, block_count)

    return padded, block_count


def bytes_to_words(chunk: bytes) -> List[int]:
    """Convert a 64-byte chunk into 16 32-bit words (big-endian)."""
    words = []
    for i in range(0, BLOCK_SIZE, WORD_SIZE):
        word = int.from_bytes(chunk[i:i + WORD_SIZE], byteorder='big')
        words.append(word)
    return words


def create_message_schedule(words: Sequence[int]) -> List[int]:
    """
    Expand 16 words into 64 words for the message schedule.

    For i from 16 to 63:
        W[i] = σ1(W[i-2]) + W[i-7] + σ0(W[i-15]) + W[i-16]
    """
    w = list(words)
    for i in range(16, SCHEDULE_LENGTH):
        s0 = _sigma0(w[i - 15])
        s1 = _sigma1(w[i - 2])
        w.append((w[i - 16] + s0 + w[i - 7] + s1) & MASK_32)
    return w


def compress(state: Sequence[int], w: Sequence[int]) -> State:
    """
    Perform 64 rounds of compression starting from the given state.

    The digest state itself is left untouched; see ``accumulate``.

    Args:
        state: Current hash state (8 32-bit words)
        w: Message schedule (64 32-bit words)

    Returns:
        Working variables (a, b, c, d, e, f, g, h) after the last round
    """
    a, b, c, d, e, f, g, h = state

    for i in range(ROUNDS):
        t1 = (h + _big_sigma1(e) + _ch(e, f, g) + K[i] + w[i]) & MASK_32
        t2 = (_big_sigma0(a) + _maj(a, b, c)) & MASK_32

        h = g
        g = f
        f = e
        e = (d + t1) & MASK_32
        d = c
        c = b
        b = a
        a = (t1 + t2) & MASK_32

    return (a, b, c, d, e, f, g, h)


def accumulate(state: Sequence[int], working: Sequence[int]) -> State:
    """Add the compressed working variables into the digest state (mod 2^32)."""
    return tuple((x + y) & MASK_32 for x, y in zip(state, working))


def process_block(state: Sequence[int], block: bytes) -> State:
    """
    Run one 64-byte block through packing, scheduling, compression and
    accumulation.

    Args:
        state: Digest state before this block
        block: Exactly 64 bytes

    Returns:
        Digest state after this block

    Raises:
        ValueError: If the block is not 64 bytes long
    """
    if len(block) != BLOCK_SIZE:
        raise ValueError(f"Block must be {BLOCK_SIZE} bytes, got {len(block)}")

    w = create_message_schedule(bytes_to_words(block))
    return accumulate(state, compress(state, w))


def digest_bytes(state: Sequence[int]) -> bytes:
    """Serialize the 8-word state as a 32-byte big-endian digest."""
    return b''.join(word.to_bytes(WORD_SIZE, byteorder='big') for word in state)


def render_digest(state: Sequence[int]) -> str:
    """Render the 8-word state as 64 lowercase hex characters (8 per word)."""
    return ''.join(f'{word:08x}' for word in state)


def _check_bytes(data) -> None:
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"Expected bytes-like object, got {type(data).__name__}")


def _hash_state(data: bytes) -> State:
    padded, block_count = pad_message(data)

    state: State = H_INITIAL
    for i in range(block_count):
        state = process_block(state, padded[i * BLOCK_SIZE:(i + 1) * BLOCK_SIZE])

    return state


def hash_bytes(message: bytes) -> str:
    """
    Compute the SHA-256 digest of an in-memory message.

    Args:
        message: Input bytes (any length, including empty)

    Returns:
        64-character lowercase hexadecimal digest

    Raises:
        TypeError: If message is not bytes-like

    Example:
        >>> hash_bytes(b"abc")
        'ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad'
    """
    _check_bytes(message)
    return render_digest(_hash_state(message))


def sha256(data: bytes) -> bytes:
    """
    Compute the SHA-256 hash of the input data.

    Args:
        data: Input bytes to hash

    Returns:
        256-bit (32-byte) digest as bytes

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    _check_bytes(data)
    return digest_bytes(_hash_state(data))


def sha256_hex(data: bytes) -> str:
    """Compute SHA-256 hash and return as hexadecimal string."""
    return hash_bytes(data)


def sha256_string(text: str, encoding: str = 'utf-8') -> bytes:
    """
    Compute SHA-256 hash of a string.

    Args:
        text: Input string to hash
        encoding: String encoding (default: utf-8)

    Returns:
        256-bit (32-byte) digest as bytes
    """
    return sha256(text.encode(encoding))


# Self-test when run directly
if __name__ == "__main__":
    # Test vectors from NIST
    test_cases = [
        (b"", "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"),
        (b"abc", "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"),
        (b"abcdbcdecdefdefgefghfghighijhijkijkljklmklmnlmnomnopnopq",
         "248d6a61d20638b8e5c026930c3e6039a33ce45964ff2167f6ecedd419db06c1"),
        (b"The quick brown fox jumps over the lazy dog",
         "d7a8fbb307d7809469ca9abcb0082e4f8d5651e46d3cdb762d02d0bf37c9e592"),
    ]

    print("SHA-256 Implementation Test")
    print("=" * 60)

    all_passed = True
    for data, expected in test_cases:
        result = hash_bytes(data)
        passed = result == expected
        all_passed = all_passed and passed

        status = "✓ PASS" if passed else "✗ FAIL"
        print(f"\nInput: {data[:50]}{'...' if len(data) > 50 else ''}")
        print(f"Expected: {expected}")
        print(f"Got:      {result}")
        print(f"Status:   {status}")

    print("\n" + "=" * 60)
    print(f"Overall: {'All tests passed!' if all_passed else 'Some tests failed!'}")
