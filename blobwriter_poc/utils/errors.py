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
Harness Errors
================================================================================
Author: Vaquar Khan (vaquar.khan@gmail.com)
Purpose: Failures raised when a written payload does not read back identically
"""

from typing import Optional


class HarnessError(Exception):
    """Base class for all round-trip verification failures"""


class LengthMismatchError(HarnessError):
    """
    Two compared buffers differ in length

    Always fatal: either the write path or the read path is broken.
    """

    def __init__(self, expected_length: int, actual_length: int, message: Optional[str] = None):
        self.expected_length = expected_length
        self.actual_length = actual_length
        super().__init__(
            message or f"buffer lengths differ: expected {expected_length} bytes, got {actual_length}"
        )


class ByteMismatchError(HarnessError):
    """
    Two equal-length buffers differ at `offset` (the first divergence)

    Always fatal: indicates data corruption.
    """

    def __init__(self, offset: int, expected_byte: int, actual_byte: int):
        self.offset = offset
        self.expected_byte = expected_byte
        self.actual_byte = actual_byte
        super().__init__(
            f"buffers differ at offset {offset}: "
            f"expected 0x{expected_byte:02x}, got 0x{actual_byte:02x}"
        )
