"""
Benchmark suite for jtree JSON parsing performance.

Compares jtree against standard JSON libraries including:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)

Measures parsing speed and memory usage across different data types.
"""
