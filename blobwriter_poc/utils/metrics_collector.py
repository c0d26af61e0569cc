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
Metrics Collector
================================================================================
Author: Vaquar Khan (vaquar.khan@gmail.com)
Purpose: Track process memory while large payloads are generated and written
"""

import os
import time
from dataclasses import dataclass, asdict
from typing import Dict, List, Optional

import psutil

BYTES_PER_MB = 1024 * 1024


@dataclass
class MemorySample:
    """Process memory right after one write"""
    timestamp: float
    label: Optional[str]
    byte_length: int
    rss_mb: float
    cpu_percent: float

    def to_dict(self):
        return asdict(self)


class MetricsCollector:
    """
    Samples the current process with psutil

    A write path that materializes the whole payload shows up as RSS growing
    in step with byte_length; a streaming path should stay roughly flat.
    """

    def __init__(self):
        self.process = psutil.Process(os.getpid())
        self.baseline_rss_mb = self._rss_mb()
        self.samples: List[MemorySample] = []

    def _rss_mb(self) -> float:
        return self.process.memory_info().rss / BYTES_PER_MB

    def sample(self, label: Optional[str] = None, byte_length: int = 0) -> MemorySample:
        """Record RSS and CPU for the write that just finished"""
        sample = MemorySample(
            timestamp=time.time(),
            label=label,
            byte_length=byte_length,
            rss_mb=self._rss_mb(),
            cpu_percent=self.process.cpu_percent()
        )
        self.samples.append(sample)
        return sample

    def get_summary(self) -> Dict:
        """Baseline, peak and growth of RSS; empty when nothing was sampled"""
        if not self.samples:
            return {}

        peak = max(s.rss_mb for s in self.samples)
        summary = {
            'samples': len(self.samples),
            'baseline_rss_mb': self.baseline_rss_mb,
            'peak_rss_mb': peak,
            'rss_growth_mb': peak - self.baseline_rss_mb,
        }

        for label in {s.label for s in self.samples if s.label is not None}:
            summary[f'peak_rss_mb[{label}]'] = max(s.rss_mb for s in self.samples if s.label == label)

        return summary

    def reset(self):
        self.baseline_rss_mb = self._rss_mb()
        self.samples = []
