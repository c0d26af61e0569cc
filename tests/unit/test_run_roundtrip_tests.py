import asyncio
import json

import pytest

from blobwriter_poc.roundtrip_verifier import RoundTripVerifier
from blobwriter_poc.run_roundtrip_tests import ALTERNATE_DIRECTORY, RoundTripTestSuite, run_tests
from blobwriter_poc.utils.config import HarnessConfig
from blobwriter_poc.utils.errors import LengthMismatchError
from blobwriter_poc.utils.file_store import ChunkedFileStore, DEFAULT_DIRECTORY


def _config(tmp_path, **overrides) -> HarnessConfig:
    values = dict(results_dir=None, large_payload_size=4 * 1024)
    values.update(overrides)
    return HarnessConfig(**values)


class TruncatingStore(ChunkedFileStore):
    """Broken store: drops the last byte of every write."""

    def _write_blocks(self, target, data):
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data.to_bytes()[:-1])


class TestRoundTripTestSuite:

    def test_all_scenarios_pass(self, verifier, sink, tmp_path):
        results = asyncio.run(RoundTripTestSuite(verifier, sink, _config(tmp_path)).run_tests())
        # new, overwrite, alternate dir, 3 concurrent, large
        assert len(results) == 7
        assert sink.lines[0] == "starting tests"
        assert sink.lines[-1] == "tests passed!"

    def test_overwrite_targets_same_path_with_shorter_payload(self, verifier, sink, tmp_path):
        results = asyncio.run(RoundTripTestSuite(verifier, sink, _config(tmp_path)).run_tests())
        assert results[0].path == results[1].path
        assert results[0].path.endswith(".txt")
        assert results[0].byte_length == 20
        assert results[1].byte_length == 10

    def test_alternate_directory_used(self, verifier, sink, tmp_path):
        results = asyncio.run(RoundTripTestSuite(verifier, sink, _config(tmp_path)).run_tests())
        assert ALTERNATE_DIRECTORY is not DEFAULT_DIRECTORY
        assert results[2].directory == ALTERNATE_DIRECTORY.value

    def test_concurrent_writes_use_distinct_paths(self, verifier, sink, tmp_path):
        cfg = _config(tmp_path, concurrent_writes=5)
        results = asyncio.run(RoundTripTestSuite(verifier, sink, cfg).run_tests())
        concurrent = results[3:8]
        assert len({r.path for r in concurrent}) == 5
        assert all(r.byte_length == 10 for r in concurrent)

    def test_large_payload_last(self, verifier, sink, tmp_path):
        results = asyncio.run(RoundTripTestSuite(verifier, sink, _config(tmp_path)).run_tests())
        assert results[-1].byte_length == 4 * 1024

    def test_failure_aborts_before_pass_line(self, tmp_path, resolver, sink):
        verifier = RoundTripVerifier(TruncatingStore(tmp_path), resolver, sink)
        with pytest.raises(LengthMismatchError):
            asyncio.run(RoundTripTestSuite(verifier, sink, _config(tmp_path)).run_tests())
        assert "tests passed!" not in sink.lines
        # only the first write happened
        assert len([line for line in sink.lines if line.startswith("wrote ")]) == 1

    def test_saves_results(self, verifier, sink, tmp_path):
        cfg = _config(tmp_path, results_dir=tmp_path / "results")
        asyncio.run(RoundTripTestSuite(verifier, sink, cfg).run_tests())
        data = json.loads((tmp_path / "results" / "roundtrip_results.json").read_text())
        assert data['total_writes'] == 7
        assert len(data['results']) == 7

    def test_sync_wrapper(self, verifier, sink, tmp_path):
        assert len(run_tests(verifier, sink, _config(tmp_path))) == 7
