"""Utility script to profile a small workload and write an HTML report."""

import sys
from pathlib import Path

# Add project root to Python path
PROJECT_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_DIR))

from lineprof import Profiler

OUTPUT_PATH = PROJECT_DIR / "example_profile.html"


def primes_below(limit: int) -> list:
    sieve = [True] * limit
    sieve[0] = sieve[1] = False
    for number in range(2, int(limit ** 0.5) + 1):
        if sieve[number]:
            for multiple in range(number * number, limit, number):
                sieve[multiple] = False
    return [number for number, is_prime in enumerate(sieve) if is_prime]


def word_lengths(text: str) -> dict:
    lengths = {}
    for word in text.split():
        lengths[word] = len(word)
    return lengths


def run() -> None:
    profiler = Profiler().set_max_rows(15)

    with profiler:
        primes = primes_below(20_000)
        lengths = word_lengths("the quick brown fox jumps over the lazy dog " * 200)

    profiler.dump(str(OUTPUT_PATH))
    print(f"{len(primes)} primes, {len(lengths)} distinct words")
    print(profiler.report().model_dump_json(indent=2))


if __name__ == "__main__":
    run()
