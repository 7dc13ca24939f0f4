#!/usr/bin/env python3
"""
Performance Benchmark Script for OrderedTree

Tests:
1. Sequential insert throughput (sorted input, worst case for a plain BST)
2. Random insert throughput
3. Lookup throughput (hits and misses)
4. Update throughput (re-inserting present keys)
5. Removal throughput
6. Async in-order iteration throughput

Metrics:
- Operations per second (ops/sec)
- Latency (min, max, mean, median, p95, p99)
- Tree height against the AVL bound 1.44 * log2(n + 2)
"""

import asyncio
import logging
import math
import os
import random
import statistics
import sys
import time
from typing import List

from ordered_tree import Entry, OrderedTree

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger()


class PerformanceTest:
    def __init__(self, progress_every: int = 10000):
        self.progress_every = progress_every
        self.tree: OrderedTree[Entry] = OrderedTree()

    def setup(self):
        """Start from an empty tree."""
        self.tree = OrderedTree()

    def teardown(self):
        """Release the tree."""
        self.tree.clear()

    @staticmethod
    def generate_key(i: int, prefix: str = "key") -> str:
        """Generate a key with zero-padding for sorting."""
        return f"{prefix}_{i:010d}"

    @staticmethod
    def calculate_stats(latencies: List[int]) -> dict:
        """Calculate latency statistics (latencies in nanoseconds)."""
        if not latencies:
            return {}

        sorted_latencies = sorted(latencies)
        return {
            "min_us": min(latencies) / 1_000,
            "max_us": max(latencies) / 1_000,
            "mean_us": statistics.mean(latencies) / 1_000,
            "median_us": statistics.median(latencies) / 1_000,
            "p95_us": sorted_latencies[int(len(sorted_latencies) * 0.95)] / 1_000,
            "p99_us": sorted_latencies[int(len(sorted_latencies) * 0.99)] / 1_000,
        }

    @staticmethod
    def height_bound(count: int) -> float:
        """Upper bound on the height of an AVL tree holding count nodes."""
        return 1.44 * math.log2(count + 2)

    def _report_progress(self, done: int, total: int) -> None:
        if done % self.progress_every == 0:
            logger.info(f"  Progress: {done}/{total} operations")

    def _shape_stats(self) -> dict:
        size = self.tree.size()
        return {
            "size": size,
            "height": self.tree.height(),
            "height_bound": self.height_bound(size),
        }

    def test_insert(self, keys: List[str], description: str) -> dict:
        """Insert every key once."""
        print(f"\n{'='*60}")
        print(f"{description} Test: {len(keys)} operations")
        print(f"{'='*60}")

        latencies = []
        start_time = time.perf_counter_ns()

        for i, key in enumerate(keys, 1):
            op_start = time.perf_counter_ns()
            self.tree.insert(Entry(key, i))
            latencies.append(time.perf_counter_ns() - op_start)
            self._report_progress(i, len(keys))

        elapsed = (time.perf_counter_ns() - start_time) / 1_000_000_000

        results = {
            "test": description,
            "count": len(keys),
            "elapsed_sec": elapsed,
            "ops_per_sec": len(keys) / elapsed,
            **self._shape_stats(),
            **self.calculate_stats(latencies),
        }

        self.print_results(results)
        return results

    def test_lookup(self, count: int, key_range: int, description: str = "Random Lookup") -> dict:
        """Look up random keys, half of them outside the stored range."""
        print(f"\n{'='*60}")
        print(f"{description} Test: {count} operations")
        print(f"{'='*60}")

        latencies = []
        hits = 0
        keys = [self.generate_key(random.randrange(key_range * 2)) for _ in range(count)]

        start_time = time.perf_counter_ns()

        for i, key in enumerate(keys, 1):
            op_start = time.perf_counter_ns()
            found = self.tree.in_tree(Entry.probe(key))
            latencies.append(time.perf_counter_ns() - op_start)

            if found:
                hits += 1
            self._report_progress(i, count)

        elapsed = (time.perf_counter_ns() - start_time) / 1_000_000_000

        results = {
            "test": description,
            "count": count,
            "hits": hits,
            "hit_rate": hits / count,
            "elapsed_sec": elapsed,
            "ops_per_sec": count / elapsed,
            **self.calculate_stats(latencies),
        }

        self.print_results(results)
        return results

    def test_update(self, count: int, key_range: int) -> dict:
        """Re-insert present keys; size and height must not change."""
        print(f"\n{'='*60}")
        print(f"Update Test: {count} operations")
        print(f"{'='*60}")

        before = self._shape_stats()
        latencies = []
        start_time = time.perf_counter_ns()

        for i in range(1, count + 1):
            key = self.generate_key(random.randrange(key_range))
            op_start = time.perf_counter_ns()
            self.tree.insert(Entry(key, -i))
            latencies.append(time.perf_counter_ns() - op_start)
            self._report_progress(i, count)

        elapsed = (time.perf_counter_ns() - start_time) / 1_000_000_000
        after = self._shape_stats()

        if before["size"] != after["size"] or before["height"] != after["height"]:
            logger.error(f"Updates changed the tree shape: {before} -> {after}")

        results = {
            "test": "Update",
            "count": count,
            "elapsed_sec": elapsed,
            "ops_per_sec": count / elapsed,
            **after,
            **self.calculate_stats(latencies),
        }

        self.print_results(results)
        return results

    def test_remove(self, keys: List[str]) -> dict:
        """Remove the given keys."""
        print(f"\n{'='*60}")
        print(f"Remove Test: {len(keys)} operations")
        print(f"{'='*60}")

        latencies = []
        removed = 0
        start_time = time.perf_counter_ns()

        for i, key in enumerate(keys, 1):
            op_start = time.perf_counter_ns()
            if self.tree.remove(Entry.probe(key)):
                removed += 1
            latencies.append(time.perf_counter_ns() - op_start)
            self._report_progress(i, len(keys))

        elapsed = (time.perf_counter_ns() - start_time) / 1_000_000_000

        results = {
            "test": "Remove",
            "count": len(keys),
            "removed": removed,
            "elapsed_sec": elapsed,
            "ops_per_sec": len(keys) / elapsed,
            **self._shape_stats(),
            **self.calculate_stats(latencies),
        }

        self.print_results(results)
        return results

    async def test_async_iteration(self) -> dict:
        """Walk the whole tree with the async iterator."""
        print(f"\n{'='*60}")
        print(f"Async Iteration Test: {self.tree.size()} elements")
        print(f"{'='*60}")

        visited = 0
        previous = None
        ordered = True
        start_time = time.perf_counter_ns()

        async for entry in self.tree:
            if previous is not None and not previous < entry:
                ordered = False
            previous = entry
            visited += 1

        elapsed = (time.perf_counter_ns() - start_time) / 1_000_000_000

        if not ordered:
            logger.error("Async iteration produced elements out of order")

        results = {
            "test": "Async Iteration",
            "count": visited,
            "ordered": ordered,
            "elapsed_sec": elapsed,
            "ops_per_sec": visited / elapsed if elapsed else float("inf"),
        }

        self.print_results(results)
        return results

    @staticmethod
    def print_results(results: dict):
        """Print test results in a formatted way."""
        print(f"\nResults for {results['test']}:")
        print("-" * 40)
        for key, value in results.items():
            if key == "test":
                continue
            if isinstance(value, float):
                print(f"  {key:20s}: {value:,.3f}")
            else:
                print(f"  {key:20s}: {value}")


async def run_benchmark(count: int):
    """Run every test against a tree of count elements."""
    print(f"\n{'#'*60}")
    print(f"# OrderedTree Benchmark: {count} elements")
    print(f"{'#'*60}")

    all_results = []
    keys = [PerformanceTest.generate_key(i) for i in range(count)]

    test = PerformanceTest()
    try:
        test.setup()
        all_results.append(test.test_insert(keys, "Sequential Insert"))
    finally:
        test.teardown()

    shuffled = list(keys)
    random.shuffle(shuffled)

    test = PerformanceTest()
    try:
        test.setup()
        all_results.append(test.test_insert(shuffled, "Random Insert"))
        all_results.append(test.test_lookup(count, count))
        all_results.append(test.test_update(count // 2, count))
        all_results.append(await test.test_async_iteration())
        random.shuffle(shuffled)
        all_results.append(test.test_remove(shuffled[: count // 2]))
    finally:
        test.teardown()

    # Summary
    print(f"\n{'#'*60}")
    print(f"# SUMMARY")
    print(f"{'#'*60}")

    for i, result in enumerate(all_results, 1):
        line = f"{i}. {result['test']}: {result['ops_per_sec']:,.0f} ops/sec"
        if "height" in result:
            line += f", height {result['height']} (bound {result['height_bound']:.1f})"
        print(line)

    return all_results


async def run_quick_tests():
    await run_benchmark(10_000)


async def run_comprehensive_tests():
    await run_benchmark(200_000)


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "quick":
        asyncio.run(run_quick_tests())
    else:
        asyncio.run(run_comprehensive_tests())
