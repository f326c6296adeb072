"""
sha256kit - Main Entry Point
Prints SHA-256 digests of files, sha256sum-style.

Usage:
    sha256kit [--mode stream|buffer|both] [--check HEX] [-v] FILE...

A FILE of "-" reads standard input (stream mode only).
"""

import os
import sys
import hmac
import logging
import argparse
from typing import List, Optional

from .core_crypto.stream import FileChunkReader, InputSourceUnavailable, hash_stream
from .files.file_hash import (
    compute_file_hash, compute_file_hash_buffered, normalize_hex_digest
)


logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "SHA256KIT_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"

EXIT_OK = 0
EXIT_MISMATCH = 1
EXIT_UNREADABLE = 2


def configure_logging(verbose: int = 0) -> None:
    """Configure root logging from -v flags or the SHA256KIT_LOG_LEVEL variable."""
    if verbose:
        level = logging.DEBUG
    else:
        level_name = os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
        level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sha256kit",
        description="Compute SHA-256 digests of files",
    )
    parser.add_argument("files", metavar="FILE", nargs="+", help="file to hash, or - for standard input")
    parser.add_argument("-m", "--mode", choices=("stream", "buffer", "both"), default="stream",
                        help="hash by streaming blocks, by reading the whole file, or both and compare")
    parser.add_argument("-c", "--check", metavar="HEX", default=None,
                        help="expected digest; exit with status 1 on mismatch")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="increase verbosity")
    return parser


def _hash_stdin() -> str:
    reader = FileChunkReader(sys.stdin.buffer, name="<stdin>")
    return hash_stream(reader)


def _hash_path(path: str, mode: str) -> List[str]:
    if path == "-":
        return [_hash_stdin()]
    if mode == "stream":
        return [compute_file_hash(path)]
    if mode == "buffer":
        return [compute_file_hash_buffered(path)]
    return [compute_file_hash(path), compute_file_hash_buffered(path)]


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for sha256kit."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    expected = None
    if args.check is not None:
        try:
            expected = normalize_hex_digest(args.check)
        except ValueError as exc:
            parser.error(str(exc))

    status = EXIT_OK
    for path in args.files:
        try:
            digests = _hash_path(path, args.mode)
        except InputSourceUnavailable as exc:
            print(f"sha256kit: {exc}", file=sys.stderr)
            status = max(status, EXIT_UNREADABLE)
            continue

        if len(digests) == 2:
            print(f"{digests[0]}  {path} (stream)")
            print(f"{digests[1]}  {path} (buffer)")
            if digests[0] != digests[1]:
                logger.error("Stream and buffer digests differ for %s", path)
                status = max(status, EXIT_MISMATCH)
        else:
            print(f"{digests[0]}  {path}")

        if expected is not None:
            if all(hmac.compare_digest(d, expected) for d in digests):
                print(f"{path}: OK")
            else:
                print(f"{path}: FAILED")
                status = max(status, EXIT_MISMATCH)

    return status


if __name__ == "__main__":
    sys.exit(main())
