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
File Stores and URI Resolver
================================================================================
Author: Vaquar Khan (vaquar.khan@gmail.com)
Purpose: Write payloads into logical directories and read them back by URI

The harness only relies on the FileStore contract:

    write(path, directory, data) -> WriteResult(uri)

Two local-disk stores implement it, mirroring the two write paths that are
benchmarked against each other:

- ChunkedFileStore: streams the payload to disk block by block
- Base64FileStore: materializes the payload, ships it as a base64 string and
  decodes it on the far side before writing

UriResolver is the independent read path. It maps a returned URI back to a
local address and reads it through pyarrow's filesystem layer, sharing no
code with either store.
"""

import asyncio
import base64
from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict
from enum import Enum
from pathlib import Path
from urllib.parse import urlparse
from urllib.request import url2pathname

from pyarrow.fs import LocalFileSystem

from blobwriter_poc.utils.payload_generator import Payload

DEFAULT_BLOCK_SIZE = 1024 * 1024


class Directory(Enum):
    """Logical storage areas, each independently writable"""
    DOCUMENTS = "documents"
    DATA = "data"
    CACHE = "cache"
    EXTERNAL = "external"
    EXTERNAL_STORAGE = "external_storage"


DEFAULT_DIRECTORY = Directory.DATA


@dataclass(frozen=True)
class WriteResult:
    """Opaque locator of written content"""
    uri: str

    def to_dict(self):
        return asdict(self)


class FileStore(ABC):
    """Contract the harness requires from a storage bridge"""

    @abstractmethod
    async def write(self, path: str, directory: Directory, data: Payload) -> WriteResult:
        """Create or overwrite `path` inside `directory` with `data`"""


class LocalFileStore(FileStore):
    """Base class for stores backed by a local directory tree"""

    def __init__(self, root: Path):
        self.root = Path(root).resolve()

    def target_path(self, path: str, directory: Directory) -> Path:
        """Map (path, directory) to a file under root, rejecting escapes"""
        if not path:
            raise ValueError("path must be a non-empty string")

        base = self.root / directory.value
        target = (base / path).resolve()
        if base.resolve() not in target.parents:
            raise ValueError(f"path {path!r} escapes directory {directory.name}")

        return target


class ChunkedFileStore(LocalFileStore):
    """Streams payload blocks straight to disk"""

    def __init__(self, root: Path, block_size: int = DEFAULT_BLOCK_SIZE):
        super().__init__(root)
        self.block_size = block_size

    async def write(self, path: str, directory: Directory, data: Payload) -> WriteResult:
        target = self.target_path(path, directory)
        await asyncio.to_thread(self._write_blocks, target, data)
        return WriteResult(uri=target.as_uri())

    def _write_blocks(self, target: Path, data: Payload):
        target.parent.mkdir(parents=True, exist_ok=True)
        # 'wb' truncates, so an overwrite never keeps old trailing bytes
        with open(target, 'wb') as f:
            for block in data.iter_blocks(self.block_size):
                f.write(block)


class Base64FileStore(LocalFileStore):
    """
    Ships the whole payload as one base64 string

    Models a bridge that can only carry text: the payload is read into one
    contiguous buffer and encoded before crossing, then decoded and written.
    """

    async def write(self, path: str, directory: Directory, data: Payload) -> WriteResult:
        target = self.target_path(path, directory)
        encoded = base64.b64encode(data.to_bytes()).decode('ascii')
        await asyncio.to_thread(self._write_encoded, target, encoded)
        return WriteResult(uri=target.as_uri())

    def _write_encoded(self, target: Path, encoded: str):
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(base64.b64decode(encoded))


class UriResolver:
    """Reads written content back from its URI"""

    def __init__(self, block_size: int = DEFAULT_BLOCK_SIZE):
        self.block_size = block_size
        self.filesystem = LocalFileSystem()

    def convert_file_src(self, uri: str) -> str:
        """Convert a file:// URI into a fetchable local address"""
        parsed = urlparse(uri)
        if parsed.scheme != 'file':
            raise ValueError(f"Unsupported URI scheme: {uri}")
        return url2pathname(parsed.path)

    async def fetch(self, address: str) -> Payload:
        return await asyncio.to_thread(self._read_stream, address)

    async def read(self, uri: str) -> Payload:
        """Resolve `uri` and fetch its content as a new Payload"""
        return await self.fetch(self.convert_file_src(uri))

    def _read_stream(self, address: str) -> Payload:
        chunks = []
        # No compression detection: a .gz or .zst name must read back raw bytes
        with self.filesystem.open_input_stream(address, compression=None) as stream:
            while True:
                chunk = stream.read(self.block_size)
                if not chunk:
                    break
                chunks.append(chunk)
        return Payload(parts=tuple(chunks))


STORE_TYPES = {
    'chunked': ChunkedFileStore,
    'base64': Base64FileStore,
}


def build_store(name: str, root: Path) -> FileStore:
    """Create a store by its CLI name ('chunked' or 'base64')"""
    if name not in STORE_TYPES:
        raise ValueError(f"Unknown store {name!r}, expected one of {sorted(STORE_TYPES)}")
    return STORE_TYPES[name](root)
