import numpy as np
import pytest

from blobwriter_poc.roundtrip_verifier import RoundTripVerifier
from blobwriter_poc.utils.file_store import Base64FileStore, ChunkedFileStore, UriResolver
from blobwriter_poc.utils.log_sink import MemorySink


@pytest.fixture
def sink() -> MemorySink:
    return MemorySink()


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator so random payloads are reproducible."""
    return np.random.default_rng(1234)


@pytest.fixture
def chunked_store(tmp_path) -> ChunkedFileStore:
    # Small blocks so even short payloads cross block boundaries
    return ChunkedFileStore(tmp_path / "store", block_size=7)


@pytest.fixture
def base64_store(tmp_path) -> Base64FileStore:
    return Base64FileStore(tmp_path / "store")


@pytest.fixture
def resolver() -> UriResolver:
    return UriResolver(block_size=5)


@pytest.fixture
def verifier(chunked_store, resolver, sink) -> RoundTripVerifier:
    return RoundTripVerifier(chunked_store, resolver, sink, compare_block_size=4)
