"""
Blob writer round-trip verification and write throughput benchmark

Author: Vaquar Khan (vaquar.khan@gmail.com)
"""

__version__ = "0.1.0"
