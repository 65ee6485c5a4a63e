"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements full-content file hashing with pluggable digest algorithms.

Files are streamed through the digest in fixed-size chunks, so memory use
does not grow with file size.
"""

import hashlib
import logging
from typing import Union

import xxhash

from clonespotter.core.models import HashAlgorithm
from clonespotter.core.interfaces import ContentHasher, DigestState, HashAlgorithmImpl

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


# Use the same way to implement and use any other hashing algorithm
class HashlibAlgorithmImpl(HashAlgorithmImpl):
    def __init__(self, name: str):
        self.name = name

    def new(self) -> DigestState:
        return hashlib.new(self.name)


class XXHash128AlgorithmImpl(HashAlgorithmImpl):
    def new(self) -> DigestState:
        return xxhash.xxh3_128()


def algorithm_impl(algorithm: Union[HashAlgorithm, str]) -> HashAlgorithmImpl:
    """
    Maps a selector to its implementation.
    Unrecognized selectors fall back to MD5 (see HashAlgorithm.parse).
    """
    algorithm = HashAlgorithm.parse(algorithm)
    if algorithm == HashAlgorithm.XXH128:
        return XXHash128AlgorithmImpl()
    return HashlibAlgorithmImpl(algorithm.value)


class HasherImpl(ContentHasher):
    """
    Computes the digest of a file's full byte stream as lowercase hex.
    Holds no per-file state, so one instance can be shared by all workers.
    """

    def __init__(self, algorithm: Union[HashAlgorithm, str] = HashAlgorithm.MD5,
                 chunk_size: int = CHUNK_SIZE):
        self.algorithm = HashAlgorithm.parse(algorithm)
        self._impl = algorithm_impl(self.algorithm)
        self.chunk_size = chunk_size if chunk_size > 0 else CHUNK_SIZE

    def compute_hash(self, path: str) -> str:
        """
        Streams `path` through the configured digest.

        Raises:
            OSError: If the file cannot be opened or a read fails partway.
                     The message names the offending path.
        """
        digest = self._impl.new()
        try:
            with open(path, 'rb') as f:
                while True:
                    chunk = f.read(self.chunk_size)
                    if not chunk:
                        break
                    digest.update(chunk)
        except OSError as e:
            raise OSError(f"Failed to read {path}: {e}") from e
        return digest.hexdigest()

    def __repr__(self):
        return f"<HasherImpl algorithm={self.algorithm.value}>"
