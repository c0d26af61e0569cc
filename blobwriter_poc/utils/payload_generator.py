#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Copyright 2026 Vaquar Khan

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.

================================================================================
Payload Generator
================================================================================
Author: Vaquar Khan (vaquar.khan@gmail.com)
Purpose: Generate binary payloads of exact sizes under bounded memory
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple

import numpy as np

from blobwriter_poc.utils.errors import LengthMismatchError

OCTET_STREAM = "application/octet-stream"

# Largest zero-filled chunk appended per step by generate_uniform()
MAX_CHUNK_SIZE = 10 * 1024 * 1024


@dataclass(frozen=True)
class Payload:
    """
    Immutable binary blob under test

    Stored as a tuple of immutable parts. Concatenation builds a new Payload
    that shares the existing parts, so growing a payload never copies what
    was already appended.
    """
    parts: Tuple[bytes, ...] = ()
    content_type: str = OCTET_STREAM
    size: int = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, 'size', sum(len(p) for p in self.parts))

    @classmethod
    def from_bytes(cls, data: bytes, content_type: str = OCTET_STREAM) -> "Payload":
        return cls(parts=(bytes(data),) if data else (), content_type=content_type)

    def __len__(self) -> int:
        return self.size

    def concat(self, chunk: bytes) -> "Payload":
        """Return a new Payload with `chunk` appended"""
        if not chunk:
            return self
        return Payload(parts=self.parts + (bytes(chunk),), content_type=self.content_type)

    def iter_parts(self) -> Iterator[bytes]:
        return iter(self.parts)

    def iter_blocks(self, block_size: int) -> Iterator[memoryview]:
        """
        Yield the payload as consecutive blocks of exactly `block_size` bytes

        Only the final block may be shorter. Block boundaries do not depend on
        how the payload is split into parts, so two payloads of equal length
        always yield aligned blocks.
        """
        if block_size <= 0:
            raise ValueError(f"block_size must be positive, got {block_size}")

        pending = bytearray()
        for part in self.parts:
            view = memoryview(part)
            offset = 0

            if pending:
                take = min(block_size - len(pending), len(view))
                pending += view[:take]
                offset = take
                if len(pending) < block_size:
                    continue
                yield memoryview(bytes(pending))
                pending.clear()

            while len(view) - offset >= block_size:
                yield view[offset:offset + block_size]
                offset += block_size

            pending += view[offset:]

        if pending:
            yield memoryview(bytes(pending))

    def to_bytes(self) -> bytes:
        """Materialize the whole payload as one contiguous buffer"""
        if len(self.parts) == 1:
            return self.parts[0]
        return b''.join(self.parts)


def generate_random(byte_length: int, rng: Optional[np.random.Generator] = None) -> Payload:
    """
    Generate a payload of uniformly random bytes

    Every byte is drawn independently from [0, 255]. Slower than
    generate_uniform() and allocates the full buffer at once, so it is meant
    for small-to-medium payloads where entropy makes the comparison meaningful.

    Args:
        byte_length: Exact payload size in bytes
        rng: Optional numpy Generator for reproducible payloads

    Returns:
        Payload of exactly byte_length bytes
    """
    if byte_length < 0:
        raise ValueError(f"byte_length must be >= 0, got {byte_length}")

    rng = rng or np.random.default_rng()
    buffer = rng.integers(0, 256, size=byte_length, dtype=np.uint8)

    return Payload.from_bytes(buffer.tobytes())


def generate_uniform(byte_length: int, max_chunk_size: int = MAX_CHUNK_SIZE) -> Payload:
    """
    Generate a zero-filled payload incrementally

    Appends zero chunks of at most max_chunk_size bytes onto a growing payload
    instead of allocating byte_length bytes in one shot.

    Args:
        byte_length: Exact payload size in bytes
        max_chunk_size: Chunk ceiling in bytes (default 10 MiB)

    Returns:
        Payload of exactly byte_length bytes

    Raises:
        LengthMismatchError: the assembled payload has the wrong length
    """
    if byte_length < 0:
        raise ValueError(f"byte_length must be >= 0, got {byte_length}")
    if max_chunk_size <= 0:
        raise ValueError(f"max_chunk_size must be positive, got {max_chunk_size}")

    payload = Payload()
    full_chunk = None
    position = 0

    while position < byte_length:
        size = min(max_chunk_size, byte_length - position)
        if size == max_chunk_size:
            # Full chunks are identical, share one buffer between them
            if full_chunk is None:
                full_chunk = bytes(max_chunk_size)
            chunk = full_chunk
        else:
            chunk = bytes(size)

        payload = payload.concat(chunk)
        position += size

    if payload.size != byte_length:
        raise LengthMismatchError(byte_length, payload.size, message="length mismatch")

    return payload
