
"""
Write Throughput Benchmark - Exponential Payload Size Sweep

Author: Vaquar Khan (vaquar.khan@gmail.com)

Compares competing write paths by timing writes of uniform payloads whose
size doubles on every step, from 1 byte up to a configurable ceiling.

Scenario:
- For each write path: byte_length = 1, 2, 4, ... while <= max_size
- Generate a zero-filled payload of byte_length bytes
- Time one write per size and record process memory

Known risk:
- Large sizes can exhaust memory or crash the host. That outcome is part of
  what the benchmark measures, so no recovery is attempted. Lower the
  ceiling or skip the benchmark; correctness testing does not depend on it.
"""

import json
import time
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Callable, Dict, List, Optional

from blobwriter_poc.utils.file_store import DEFAULT_DIRECTORY, Directory, FileStore
from blobwriter_poc.utils.log_sink import LogSink, console_sink
from blobwriter_poc.utils.metrics_collector import MetricsCollector
from blobwriter_poc.utils.payload_generator import MAX_CHUNK_SIZE, generate_uniform

PathGenerator = Callable[[], str]


@dataclass
class ThroughputSample:
    """One timed write"""
    path_name: str
    byte_length: int
    elapsed_ms: float
    throughput_mb_per_sec: float
    memory_mb: float

    def to_dict(self):
        return asdict(self)


def sweep_sizes(max_size: int) -> List[int]:
    """1, 2, 4, ... up to and including max_size"""
    sizes = []
    byte_length = 1
    while byte_length <= max_size:
        sizes.append(byte_length)
        byte_length *= 2
    return sizes


class WriteThroughputBenchmark:
    """Times competing write paths across an exponential size sweep"""

    def __init__(
        self,
        stores: Dict[str, FileStore],
        sink: LogSink = console_sink,
        metrics: MetricsCollector = None,
        directory: Directory = DEFAULT_DIRECTORY,
        max_chunk_size: int = MAX_CHUNK_SIZE,
        output_dir: Optional[Path] = None
    ):
        if not stores:
            raise ValueError("at least one write path is required")
        self.stores = stores
        self.sink = sink
        self.metrics = metrics or MetricsCollector()
        self.directory = directory
        self.max_chunk_size = max_chunk_size
        self.output_dir = output_dir

    async def measure_write(self, path_name: str, path: str, byte_length: int) -> ThroughputSample:
        """
        Generate a uniform payload and time a single write of it

        Args:
            path_name: Key of the write path in self.stores
            path: Target file name
            byte_length: Payload size in bytes

        Returns:
            ThroughputSample for this write
        """
        payload = generate_uniform(byte_length, self.max_chunk_size)

        start = time.perf_counter()
        await self.stores[path_name].write(path, self.directory, payload)
        elapsed_ms = (time.perf_counter() - start) * 1000

        memory = self.metrics.sample(path_name, byte_length)
        elapsed_sec = elapsed_ms / 1000
        throughput = (byte_length / (1024 * 1024)) / elapsed_sec if elapsed_sec > 0 else 0.0

        return ThroughputSample(
            path_name=path_name,
            byte_length=byte_length,
            elapsed_ms=elapsed_ms,
            throughput_mb_per_sec=throughput,
            memory_mb=memory.rss_mb
        )

    async def run_benchmark(self, path_generator: PathGenerator, max_size: int) -> List[ThroughputSample]:
        """
        Run the sweep for every write path

        Args:
            path_generator: Returns a fresh file name for each write
            max_size: Largest payload size; the sweep stops once doubling exceeds it

        Returns:
            List of ThroughputSample, grouped by write path in sweep order
        """
        self.sink("starting benchmark")
        samples = []

        for path_name in self.stores:
            for byte_length in sweep_sizes(max_size):
                sample = await self.measure_write(path_name, path_generator(), byte_length)
                samples.append(sample)
                self.sink(f"{path_name} wrote {byte_length} in {sample.elapsed_ms:.0f}ms")

        self.sink("benchmark finished")

        self._print_summary(samples)
        if self.output_dir is not None:
            self._save_results(samples, max_size)

        return samples

    def _print_summary(self, samples: List[ThroughputSample]):
        """Print one row per size with elapsed time for each write path"""
        names = list(self.stores)
        by_key = {(s.path_name, s.byte_length): s for s in samples}
        sizes = sorted({s.byte_length for s in samples})

        self.sink("=" * 60)
        self.sink("RESULTS SUMMARY")
        self.sink("=" * 60)
        self.sink(f"{'Bytes':<14}" + "".join(f"{name + ' (ms)':<20}" for name in names))
        self.sink("-" * 60)
        for size in sizes:
            row = f"{size:<14}"
            for name in names:
                sample = by_key.get((name, size))
                row += f"{sample.elapsed_ms:<20.2f}" if sample else f"{'-':<20}"
            self.sink(row)
        self.sink("=" * 60)

        summary = self.metrics.get_summary()
        if summary:
            self.sink(f"Peak RSS: {summary['peak_rss_mb']:.1f} MB (+{summary['rss_growth_mb']:.1f} MB)")

    def _save_results(self, samples: List[ThroughputSample], max_size: int):
        """Save results to JSON file"""
        output_dir = Path(self.output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        output_file = output_dir / "write_throughput_results.json"
        with open(output_file, 'w') as f:
            json.dump({
                'max_size': max_size,
                'write_paths': list(self.stores),
                'metrics': self.metrics.get_summary(),
                'results': [s.to_dict() for s in samples]
            }, f, indent=2)
        self.sink(f"Results saved to {output_file}")
