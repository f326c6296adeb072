# Core Cryptography Module
"""
Core SHA-256 implementation including:
- Round constants and initial hash values
- Buffer-mode hashing (padding, word packing, schedule, compression)
- Stream-mode hashing over chunk readers
"""
