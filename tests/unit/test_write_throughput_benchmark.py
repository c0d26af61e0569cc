import asyncio
import itertools
import json

import pytest

from blobwriter_poc.utils.file_store import Base64FileStore, ChunkedFileStore
from blobwriter_poc.utils.metrics_collector import MetricsCollector
from blobwriter_poc.write_throughput_benchmark import (
    ThroughputSample,
    WriteThroughputBenchmark,
    sweep_sizes,
)


def _paths():
    counter = itertools.count()
    return lambda: f"{next(counter)}.bin"


@pytest.fixture
def stores(tmp_path):
    return {
        'BlobWriter': ChunkedFileStore(tmp_path / "store"),
        'Base64Bridge': Base64FileStore(tmp_path / "store"),
    }


class TestSweepSizes:

    def test_doubles_from_one(self):
        assert sweep_sizes(16) == [1, 2, 4, 8, 16]

    def test_ceiling_not_power_of_two(self):
        assert sweep_sizes(20) == [1, 2, 4, 8, 16]

    def test_below_one_is_empty(self):
        assert sweep_sizes(0) == []

    def test_bounded_iteration_count(self):
        assert len(sweep_sizes(256 * 1024 * 1024)) == 29


class TestWriteThroughputBenchmark:

    def test_requires_a_store(self, sink):
        with pytest.raises(ValueError):
            WriteThroughputBenchmark({}, sink)

    def test_samples_per_path_and_size(self, stores, sink):
        bench = WriteThroughputBenchmark(stores, sink, max_chunk_size=8)
        samples = asyncio.run(bench.run_benchmark(_paths(), 64))
        assert [(s.path_name, s.byte_length) for s in samples] == (
            [('BlobWriter', n) for n in sweep_sizes(64)]
            + [('Base64Bridge', n) for n in sweep_sizes(64)]
        )
        assert all(isinstance(s, ThroughputSample) for s in samples)
        assert all(s.elapsed_ms >= 0 and s.memory_mb > 0 for s in samples)

    def test_writes_have_requested_size(self, stores, sink, tmp_path):
        names = iter(["a.bin", "b.bin", "c.bin"])
        bench = WriteThroughputBenchmark({'BlobWriter': stores['BlobWriter']}, sink)
        asyncio.run(bench.run_benchmark(lambda: next(names), 4))
        data_dir = tmp_path / "store" / "data"
        assert [(data_dir / n).stat().st_size for n in ("a.bin", "b.bin", "c.bin")] == [1, 2, 4]

    def test_log_lines(self, stores, sink):
        bench = WriteThroughputBenchmark(stores, sink)
        asyncio.run(bench.run_benchmark(_paths(), 2))
        assert sink.lines[0] == "starting benchmark"
        assert "benchmark finished" in sink.lines
        assert any(line.startswith("BlobWriter wrote 2 in ") for line in sink.lines)
        assert any(line.startswith("Base64Bridge wrote 1 in ") for line in sink.lines)

    def test_collects_memory_metrics(self, stores, sink):
        metrics = MetricsCollector()
        bench = WriteThroughputBenchmark(stores, sink, metrics=metrics)
        asyncio.run(bench.run_benchmark(_paths(), 8))
        assert [(s.label, s.byte_length) for s in metrics.samples][:4] == [('BlobWriter', n) for n in (1, 2, 4, 8)]
        assert len(metrics.samples) == 8

    def test_saves_results(self, stores, sink, tmp_path):
        bench = WriteThroughputBenchmark(stores, sink, output_dir=tmp_path / "results")
        asyncio.run(bench.run_benchmark(_paths(), 4))
        data = json.loads((tmp_path / "results" / "write_throughput_results.json").read_text())
        assert data['max_size'] == 4
        assert data['write_paths'] == ['BlobWriter', 'Base64Bridge']
        assert len(data['results']) == 6

    def test_store_error_propagates(self, tmp_path, sink):
        class Broken(ChunkedFileStore):
            async def write(self, path, directory, data):
                raise MemoryError()

        bench = WriteThroughputBenchmark({'Broken': Broken(tmp_path)}, sink)
        with pytest.raises(MemoryError):
            asyncio.run(bench.run_benchmark(_paths(), 4))
