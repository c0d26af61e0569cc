"""
Harness Configuration

Author: Vaquar Khan (vaquar.khan@gmail.com)

Defaults: 10-byte payloads for the quick scenarios, 5 MiB to force
multi-chunk writes, 3 concurrent writers and a 256 MiB ceiling for the
throughput sweep.
"""

import argparse
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import List, Optional

MIB = 1024 * 1024


@dataclass
class HarnessConfig:
    """Settings for one harness run"""
    root_dir: Optional[Path] = None        # temp dir when unset
    results_dir: Optional[Path] = Path("results")
    store: str = "chunked"
    simulate_latency: bool = False
    max_chunk_size: int = 10 * MIB
    compare_block_size: int = 1 * MIB
    small_payload_size: int = 10
    large_payload_size: int = 5 * MIB
    concurrent_writes: int = 3
    run_benchmark: bool = False
    # Sizes near this ceiling can exhaust memory; keep it configurable
    benchmark_max_size: int = 256 * MIB

    def to_dict(self):
        return {k: str(v) if isinstance(v, Path) else v for k, v in asdict(self).items()}


def build_parser() -> argparse.ArgumentParser:
    defaults = HarnessConfig()
    parser = argparse.ArgumentParser(
        prog="blobwriter-poc",
        description="Round-trip verification and write throughput benchmark for a file store"
    )
    parser.add_argument("--root-dir", type=Path, default=defaults.root_dir,
                        help="Directory backing the file store (default: new temp dir)")
    parser.add_argument("--results-dir", type=Path, default=defaults.results_dir,
                        help="Where JSON results are written")
    parser.add_argument("--no-results", action="store_true",
                        help="Do not write JSON result files")
    parser.add_argument("--store", choices=["chunked", "base64"], default=defaults.store,
                        help="Write path used for the round-trip tests")
    parser.add_argument("--simulate-latency", action="store_true",
                        help="Add simulated bridge latency to every write")
    parser.add_argument("--max-chunk-size", type=int, default=defaults.max_chunk_size)
    parser.add_argument("--compare-block-size", type=int, default=defaults.compare_block_size)
    parser.add_argument("--small-payload-size", type=int, default=defaults.small_payload_size)
    parser.add_argument("--large-payload-size", type=int, default=defaults.large_payload_size)
    parser.add_argument("--concurrent-writes", type=int, default=defaults.concurrent_writes)
    parser.add_argument("--benchmark", dest="run_benchmark", action="store_true",
                        help="Also run the write throughput sweep (may exhaust memory)")
    parser.add_argument("--benchmark-max-size", type=int, default=defaults.benchmark_max_size)
    return parser


def parse_config(argv: Optional[List[str]] = None) -> HarnessConfig:
    """Build a HarnessConfig from command line arguments"""
    parser = build_parser()
    args = parser.parse_args(argv)

    for name in ("max_chunk_size", "compare_block_size", "concurrent_writes"):
        if getattr(args, name) <= 0:
            parser.error(f"--{name.replace('_', '-')} must be positive")

    config = HarnessConfig(**{f.name: getattr(args, f.name) for f in fields(HarnessConfig)})
    if args.no_results:
        config.results_dir = None

    return config
