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
Byte-Exact Comparator
================================================================================
Author: Vaquar Khan (vaquar.khan@gmail.com)
Purpose: Confirm that payloads have identical length and identical bytes
"""

from dataclasses import dataclass, asdict
from typing import Optional, Sequence

import numpy as np

from blobwriter_poc.utils.errors import ByteMismatchError, LengthMismatchError
from blobwriter_poc.utils.payload_generator import Payload

LENGTH_MISMATCH = "length-mismatch"
BYTE_MISMATCH = "byte-mismatch"

DEFAULT_BLOCK_SIZE = 1024 * 1024


@dataclass(frozen=True)
class ComparisonOutcome:
    """Result of comparing a sequence of payloads"""
    passed: bool
    reason: Optional[str] = None
    offset: Optional[int] = None       # first differing offset (byte-mismatch only)
    pair_index: Optional[int] = None   # index of the left payload of the failing pair
    expected: Optional[int] = None     # length or byte value of the left payload
    actual: Optional[int] = None       # length or byte value of the right payload

    def to_dict(self):
        return asdict(self)

    def raise_for_failure(self):
        """Raise the matching HarnessError if the comparison failed"""
        if self.passed:
            return
        if self.reason == LENGTH_MISMATCH:
            raise LengthMismatchError(self.expected, self.actual)
        raise ByteMismatchError(self.offset, self.expected, self.actual)


def _first_difference(left: memoryview, right: memoryview) -> Optional[int]:
    """Index of the first differing byte between two equal-size blocks"""
    if left == right:
        return None
    diff = np.frombuffer(left, dtype=np.uint8) != np.frombuffer(right, dtype=np.uint8)
    return int(np.argmax(diff))


def _compare_pair(
    left: Payload,
    right: Payload,
    pair_index: int,
    block_size: int
) -> ComparisonOutcome:
    # Length check always precedes the byte scan
    if left.size != right.size:
        return ComparisonOutcome(
            passed=False,
            reason=LENGTH_MISMATCH,
            pair_index=pair_index,
            expected=left.size,
            actual=right.size
        )

    base = 0
    for left_block, right_block in zip(left.iter_blocks(block_size), right.iter_blocks(block_size)):
        index = _first_difference(left_block, right_block)
        if index is not None:
            return ComparisonOutcome(
                passed=False,
                reason=BYTE_MISMATCH,
                offset=base + index,
                pair_index=pair_index,
                expected=left_block[index],
                actual=right_block[index]
            )
        base += len(left_block)

    return ComparisonOutcome(passed=True)


def compare(payloads: Sequence[Payload], block_size: int = DEFAULT_BLOCK_SIZE) -> ComparisonOutcome:
    """
    Compare payloads pairwise from left to right

    For each adjacent pair the lengths are checked first, then the bytes are
    scanned from offset 0 upward in aligned blocks. The first failing pair
    stops the comparison and its first divergent offset is reported.

    Args:
        payloads: One or more payloads (a single payload always passes)
        block_size: Streaming block size in bytes

    Returns:
        ComparisonOutcome
    """
    if len(payloads) == 0:
        raise ValueError("compare() requires at least one payload")

    for i in range(len(payloads) - 1):
        outcome = _compare_pair(payloads[i], payloads[i + 1], i, block_size)
        if not outcome.passed:
            return outcome

    return ComparisonOutcome(passed=True)


def assert_identical(payloads: Sequence[Payload], block_size: int = DEFAULT_BLOCK_SIZE):
    """Like compare(), but raises LengthMismatchError or ByteMismatchError on failure"""
    compare(payloads, block_size).raise_for_failure()
