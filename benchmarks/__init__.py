"""
Benchmark suite for pjzon partial parsing performance.

Compares the complete-document fast path against standard JSON libraries:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)

Measures the partial parser on documents cut at several points.
"""
