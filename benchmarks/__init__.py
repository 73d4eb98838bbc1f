"""
Benchmark suite for jnorm normalization performance.

Compares jnorm against canonical dumps built from:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)

Measures normalization speed and memory usage across different data types.
"""
