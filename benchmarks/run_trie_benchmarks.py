"""Benchmark the trie operations for different numbers of keys."""

import argparse
import gc
import json
import random
import string
import time
import tracemalloc
from pathlib import Path
from typing import Callable, Optional

import matplotlib.pyplot as plt
import psutil

from ascii_trie.config import TrieConfig, load_config_file
from ascii_trie.logger import log_operation, setup_logging_from_config
from ascii_trie.trie import AsciiTrie

RESULTS_DIR = Path(__file__).parent.parent / "static" / "benchmarks"
DATA_SIZES = [1_000, 10_000, 50_000, 100_000]
KEY_LENGTH_RANGE = (4, 16)
PREFIX_LENGTH = 2
SEED = 42


def generate_keys(number_of_keys: int, rng: random.Random) -> list[str]:
    """Generate distinct random ASCII keys.

    Args:
        number_of_keys (int): How many keys to generate.
        rng (random.Random): The random generator to draw from.

    Returns:
        list[str]: The generated keys.

    """
    keys: set[str] = set()
    alphabet = string.ascii_letters + string.digits
    while len(keys) < number_of_keys:
        length = rng.randint(*KEY_LENGTH_RANGE)
        keys.add("".join(rng.choices(alphabet, k=length)))
    return list(keys)


def time_operation(
    name: str,
    operation: Callable[[str], object],
    keys: list[str],
    log_details: bool,
) -> float:
    """Apply `operation` to every key and return the average time in ms."""
    start = time.perf_counter()
    for key in keys:
        operation(key)
    elapsed_ms = (time.perf_counter() - start) * 1000
    average = elapsed_ms / max(len(keys), 1)
    if log_details:
        log_operation(name, f"<{len(keys)} keys>", elapsed_ms)
    return average


def benchmark_size(
    number_of_keys: int,
    track_size: bool,
    log_details: bool,
) -> dict[str, float | int]:
    """Run every operation on a trie holding `number_of_keys` keys.

    Args:
        number_of_keys (int): The number of keys to insert.
        track_size (bool): The size strategy of the benchmarked trie.
        log_details (bool): Whether to log each timed phase.

    Raises:
        RuntimeError: If the trie is not empty and fully pruned after
        every key was removed.

    Returns:
        dict[str, float | int]: Average times in ms and memory figures.

    """
    rng = random.Random(SEED)
    keys = generate_keys(number_of_keys, rng)
    sampled = rng.sample(keys, min(100, len(keys)))
    prefixes = [key[:PREFIX_LENGTH] for key in sampled]
    trie = AsciiTrie(track_size=track_size)
    process = psutil.Process()

    gc.collect()
    rss_before = process.memory_info().rss
    tracemalloc.start()

    results: dict[str, float | int] = {}
    results["put"] = time_operation(
        "put",
        lambda key: trie.put(key, len(key)),
        keys,
        log_details,
    )
    _, peak = tracemalloc.get_traced_memory()
    tracemalloc.stop()
    results["peak_memory_bytes"] = peak
    results["rss_delta_bytes"] = process.memory_info().rss - rss_before
    results["node_count"] = trie.node_count()

    results["get"] = time_operation("get", trie.get, keys, log_details)
    results["starts_with"] = time_operation(
        "starts_with",
        trie.starts_with,
        prefixes,
        log_details,
    )

    start = time.perf_counter()
    stored = trie.size()
    results["size"] = (time.perf_counter() - start) * 1000
    if stored != number_of_keys:
        raise RuntimeError(
            f"size() returned {stored}, expected {number_of_keys}",
        )

    results["remove"] = time_operation(
        "remove",
        trie.remove,
        keys,
        log_details,
    )
    if not trie.is_empty() or trie.node_count() != 1:
        raise RuntimeError("Dead nodes remain after removing every key")

    return results


def plot_results(
    results: dict[str, dict[int, dict[str, float | int]]],
    output_dir: Path,
) -> None:
    """Plot the average time of each operation per data size."""
    operations = ["put", "get", "starts_with", "remove"]
    try:
        for strategy, per_size in results.items():
            plt.figure(figsize=(8, 5))
            for operation in operations:
                plt.plot(
                    list(per_size),
                    [per_size[size][operation] for size in per_size],
                    marker="o",
                    label=operation,
                )
            plt.xscale("log")
            plt.xlabel("Number of keys")
            plt.ylabel("Average time per operation (ms)")
            plt.title(f"Trie operations ({strategy})")
            plt.legend()
            plt.tight_layout()
            plt.savefig(output_dir / f"benchmark_{strategy}.png")

        plt.figure(figsize=(8, 5))
        for strategy, per_size in results.items():
            plt.plot(
                list(per_size),
                [per_size[size]["size"] for size in per_size],
                marker="o",
                label=strategy,
            )
        plt.xscale("log")
        plt.xlabel("Number of keys")
        plt.ylabel("size() time (ms)")
        plt.title("size() per strategy")
        plt.legend()
        plt.tight_layout()
        plt.savefig(output_dir / "benchmark_size.png")
    finally:
        plt.close("all")


def main() -> None:
    """Main function."""
    parser = argparse.ArgumentParser(description="Benchmark the trie.")
    parser.add_argument(
        "--config_path",
        type=str,
        default=None,
        help="Optional path to a trie config file used for logging.",
        required=False,
    )
    parser.add_argument(
        "--sizes",
        type=int,
        nargs="+",
        default=DATA_SIZES,
        help="Numbers of keys to benchmark with.",
    )
    parser.add_argument(
        "--output_dir",
        type=str,
        default=str(RESULTS_DIR),
        help="Directory receiving the plots and results.json.",
    )
    args = parser.parse_args()

    config: Optional[TrieConfig] = None
    if args.config_path is not None:
        config = load_config_file(Path(args.config_path))
        setup_logging_from_config(config)

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    results: dict[str, dict[int, dict[str, float | int]]] = {}
    for strategy, track_size in (("tracked", True), ("traversal", False)):
        results[strategy] = {}
        for number_of_keys in args.sizes:
            print(
                f"\n--- Benchmarking {number_of_keys} keys ({strategy}) ---",
            )
            results[strategy][number_of_keys] = benchmark_size(
                number_of_keys,
                track_size,
                log_details=config is not None,
            )
            print(results[strategy][number_of_keys])
            gc.collect()

    plot_results(results, output_dir)

    with open(output_dir / "results.json", "w", encoding="utf-8") as f:
        json.dump(results, f, indent=4)


if __name__ == "__main__":
    main()
