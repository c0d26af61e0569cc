"""
Run All - Round-Trip Tests and Optional Throughput Benchmark

Author: Vaquar Khan (vaquar.khan@gmail.com)

Executes:
1. Round-trip verification scenarios (always)
2. Write throughput sweep across both write paths (--benchmark only;
   large sizes generally exhaust memory)

Exit codes:
  0 -- all round-trip scenarios passed (and the benchmark, if requested, finished)
  1 -- a round-trip scenario failed
  2 -- the benchmark crashed (accepted outcome, reported separately)
"""

import asyncio
import sys
import tempfile
from pathlib import Path
from typing import List, Optional

from blobwriter_poc.roundtrip_verifier import RoundTripVerifier, random_path
from blobwriter_poc.run_roundtrip_tests import RoundTripTestSuite
from blobwriter_poc.utils.config import HarnessConfig, parse_config
from blobwriter_poc.utils.file_store import FileStore, UriResolver, build_store
from blobwriter_poc.utils.latency_simulator import SimulatedLatencyStore
from blobwriter_poc.utils.log_sink import LogSink, console_sink, log_exception
from blobwriter_poc.write_throughput_benchmark import WriteThroughputBenchmark

EXIT_PASSED = 0
EXIT_TESTS_FAILED = 1
EXIT_BENCHMARK_CRASHED = 2

# Display names of the competing write paths
BENCHMARK_PATHS = {
    'BlobWriter': 'chunked',
    'Base64Bridge': 'base64',
}


def _make_store(name: str, root: Path, config: HarnessConfig) -> FileStore:
    store = build_store(name, root)
    if config.simulate_latency:
        store = SimulatedLatencyStore(store)
    return store


async def run_all(config: HarnessConfig, root: Path, sink: LogSink = console_sink) -> int:
    """
    Run the test sequence, then the benchmark if enabled

    Failures are caught here once, logged with their stack trace and mapped
    to an exit code.
    """
    verifier = RoundTripVerifier(
        store=_make_store(config.store, root, config),
        resolver=UriResolver(),
        sink=sink,
        compare_block_size=config.compare_block_size
    )

    try:
        await RoundTripTestSuite(verifier, sink, config).run_tests()
    except Exception as exc:
        log_exception(sink, exc)
        return EXIT_TESTS_FAILED

    if not config.run_benchmark:
        return EXIT_PASSED

    benchmark = WriteThroughputBenchmark(
        stores={label: _make_store(name, root, config) for label, name in BENCHMARK_PATHS.items()},
        sink=sink,
        max_chunk_size=config.max_chunk_size,
        output_dir=config.results_dir
    )
    try:
        await benchmark.run_benchmark(random_path, config.benchmark_max_size)
    except Exception as exc:
        log_exception(sink, exc)
        return EXIT_BENCHMARK_CRASHED

    return EXIT_PASSED


def main(argv: Optional[List[str]] = None, sink: LogSink = console_sink) -> int:
    """Command line entry point; returns the process exit code"""
    config = parse_config(argv)

    if config.root_dir is not None:
        return asyncio.run(run_all(config, Path(config.root_dir), sink))

    with tempfile.TemporaryDirectory(prefix="blobwriter_poc_") as tmp_dir:
        return asyncio.run(run_all(config, Path(tmp_dir), sink))


if __name__ == "__main__":
    sys.exit(main())
