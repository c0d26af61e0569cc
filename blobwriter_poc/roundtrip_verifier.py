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
Round-Trip Verifier
================================================================================
Author: Vaquar Khan (vaquar.khan@gmail.com)
Purpose: Write one payload, read it back independently, assert byte equality
"""

import random
import time
from dataclasses import dataclass, asdict
from typing import Optional

from blobwriter_poc.utils.comparator import DEFAULT_BLOCK_SIZE, assert_identical
from blobwriter_poc.utils.file_store import DEFAULT_DIRECTORY, Directory, FileStore, UriResolver
from blobwriter_poc.utils.log_sink import LogSink, console_sink
from blobwriter_poc.utils.payload_generator import Payload, generate_random

DEFAULT_PAYLOAD_SIZE = 10


def random_path(suffix: str = ".bin") -> str:
    """Random file name, e.g. '0.7281932.bin'"""
    return f"{random.random()}{suffix}"


@dataclass
class RoundTripResult:
    """Timing and location of one verified write"""
    path: str
    directory: str
    uri: str
    byte_length: int
    write_time_ms: float
    read_time_ms: float

    def to_dict(self):
        return asdict(self)


class RoundTripVerifier:
    """
    Verifies that a store write reads back byte-for-byte

    Holds no per-call state, so any number of verify_write() calls may run
    concurrently against distinct paths.
    """

    def __init__(
        self,
        store: FileStore,
        resolver: UriResolver = None,
        sink: LogSink = console_sink,
        compare_block_size: int = DEFAULT_BLOCK_SIZE
    ):
        self.store = store
        self.resolver = resolver or UriResolver()
        self.sink = sink
        self.compare_block_size = compare_block_size

    async def verify_write(
        self,
        path: Optional[str] = None,
        payload: Optional[Payload] = None,
        directory: Directory = DEFAULT_DIRECTORY
    ) -> RoundTripResult:
        """
        Write `payload` to `path` and verify the read-back

        Args:
            path: File name inside the directory (random when None)
            payload: Payload to write (10 random bytes when None)
            directory: Logical storage area

        Returns:
            RoundTripResult with write and read timings

        Raises:
            LengthMismatchError / ByteMismatchError: read-back differs
            Store errors propagate unchanged
        """
        if path is None:
            path = random_path()
        if payload is None:
            payload = generate_random(DEFAULT_PAYLOAD_SIZE)

        # Write
        start = time.perf_counter()
        result = await self.store.write(path, directory, payload)
        write_time_ms = (time.perf_counter() - start) * 1000
        self.sink(f"wrote {payload.size} bytes in {write_time_ms:.0f}ms")

        # Read back through the resolver, not the store
        start = time.perf_counter()
        address = self.resolver.convert_file_src(result.uri)
        retrieved = await self.resolver.fetch(address)
        read_time_ms = (time.perf_counter() - start) * 1000

        # Compare
        assert_identical([payload, retrieved], self.compare_block_size)

        return RoundTripResult(
            path=path,
            directory=directory.value,
            uri=result.uri,
            byte_length=payload.size,
            write_time_ms=write_time_ms,
            read_time_ms=read_time_ms
        )
