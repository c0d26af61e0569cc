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
Bridge Latency Simulator
================================================================================
Author: Vaquar Khan (vaquar.khan@gmail.com)
Purpose: Add bridge-like write latency (TTFB + transfer time) to any file store
"""

import asyncio
import random
from dataclasses import dataclass
from typing import Dict, Optional

from blobwriter_poc.utils.file_store import Directory, FileStore, WriteResult
from blobwriter_poc.utils.payload_generator import Payload


@dataclass
class LatencyProfile:
    """Bridge latency characteristics"""
    ttfb_min_ms: float = 2.0       # Minimum TTFB
    ttfb_avg_ms: float = 5.0       # Average TTFB
    ttfb_max_ms: float = 15.0      # Maximum TTFB (p99)
    throughput_mbps: float = 200.0  # Transfer throughput in MB/s

    def sample_ttfb(self, rng: Optional[random.Random] = None) -> float:
        """Sample TTFB from a clamped normal distribution"""
        rng = rng or random
        mean = self.ttfb_avg_ms
        std = (self.ttfb_max_ms - self.ttfb_min_ms) / 4

        ttfb = rng.gauss(mean, std)
        return max(self.ttfb_min_ms, min(self.ttfb_max_ms, ttfb))

    def transfer_time_ms(self, size_bytes: int) -> float:
        return (size_bytes / (1024 * 1024)) / self.throughput_mbps * 1000


class SimulatedLatencyStore(FileStore):
    """
    Delays every write on a wrapped store

    Concurrent writes sleep independently, so their completion order varies
    from run to run.
    """

    def __init__(
        self,
        inner: FileStore,
        profile: LatencyProfile = None,
        rng: Optional[random.Random] = None
    ):
        self.inner = inner
        self.profile = profile or LatencyProfile()
        self.rng = rng or random.Random()
        self.reset_stats()

    async def write(self, path: str, directory: Directory, data: Payload) -> WriteResult:
        ttfb_ms = self.profile.sample_ttfb(self.rng)
        total_time_ms = ttfb_ms + self.profile.transfer_time_ms(data.size)

        await asyncio.sleep(total_time_ms / 1000)
        result = await self.inner.write(path, directory, data)

        self.stats['total_writes'] += 1
        self.stats['total_bytes'] += data.size
        self.stats['total_delay_ms'] += total_time_ms
        self.stats['ttfb_samples'].append(ttfb_ms)

        return result

    def get_stats(self) -> Dict:
        """Get cumulative statistics"""
        if self.stats['total_writes'] == 0:
            return self.stats

        avg_ttfb = sum(self.stats['ttfb_samples']) / len(self.stats['ttfb_samples'])

        return {
            **self.stats,
            'avg_ttfb_ms': avg_ttfb,
            'avg_bytes_per_write': self.stats['total_bytes'] / self.stats['total_writes'],
            'avg_delay_per_write_ms': self.stats['total_delay_ms'] / self.stats['total_writes']
        }

    def reset_stats(self):
        """Reset statistics"""
        self.stats = {
            'total_writes': 0,
            'total_bytes': 0,
            'total_delay_ms': 0.0,
            'ttfb_samples': []
        }
