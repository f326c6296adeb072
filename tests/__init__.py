# sha256kit Test Suite
"""
Test suite including:
- Unit tests for each SHA-256 stage
- Buffer/stream cross-mode tests
- File helper and CLI tests
- Error handling tests (unreadable sources, invalid inputs)

Run with: pytest
Coverage: coverage run -m pytest && coverage report
"""
