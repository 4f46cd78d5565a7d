"""Performance benchmarks for lexmsg.

Benchmarks use pytest-benchmark to track the cost of message resolution,
reference expansion and chain traversal.

Python 3.13+.
"""

from __future__ import annotations

__all__: list[str] = []
