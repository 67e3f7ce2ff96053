"""
Empirical inclusion checks for the samplers.

Run many seeded trials, count how often each element (or bucket of elements) lands
in the sample, and compare with the expected counts using a chi-squared statistic.

- uniform: every element has inclusion probability k/n; elements are grouped into
  contiguous buckets so the expected count per cell stays large
- weighted: with k = 1 the inclusion probability is exactly w_i / sum(w), which pins
  down the jump recurrence

Usage:
    from reservoir_sampling.modules.testing.compare import compare_uniform, write_compare_results
    rows = [compare_uniform(n=1_000_000, k=7, trials=2000)]
    write_compare_results("out/compare.jsonl", rows)
"""

from __future__ import annotations
import json
import math
import os
from typing import Any, Dict, List, Sequence

from reservoir_sampling.modules.sampling.cursor import SequenceCursor
from reservoir_sampling.modules.sampling.random_source import PyRandomSource
from reservoir_sampling.modules.sampling.reservoir import WeightedReservoirSampler
from reservoir_sampling.modules.sampling.uniform import UniformReservoirSampler

# 单侧 z 临界值：0.001 显著性
Z_CRITICAL = 3.090232


def chi_square(observed: Sequence[float], expected: Sequence[float]) -> Dict[str, float]:
    """
    Pearson chi-squared statistic with a Wilson–Hilferty normal approximation:
    z = ((X/d)^(1/3) - (1 - 2/(9d))) / sqrt(2/(9d)), d = cells - 1.
    """
    if len(observed) != len(expected):
        raise ValueError("observed and expected differ in length")
    if len(observed) < 2:
        raise ValueError("need at least two cells")
    stat = 0.0
    for o, e in zip(observed, expected):
        if e <= 0:
            raise ValueError(f"expected counts must be > 0, got {e}")
        stat += (float(o) - float(e)) ** 2 / float(e)
    dof = len(observed) - 1
    c = 2.0 / (9.0 * dof)
    z = ((stat / dof) ** (1.0 / 3.0) - (1.0 - c)) / math.sqrt(c)
    return {"chi2": stat, "dof": dof, "z": z}


def uniform_inclusion_counts(n: int, k: int, trials: int, buckets: int = 100, seed: int = 0) -> Dict[str, Any]:
    """Counts per bucket of the integer stream range(n), plus the mean draws per trial."""
    buckets = max(1, min(int(buckets), int(n)))
    observed = [0] * buckets
    draws = 0
    sampler = UniformReservoirSampler()
    for t in range(int(trials)):
        rng = PyRandomSource(seed + t)
        result = sampler.sample(SequenceCursor(range(n)), k, rng)
        draws += result.draws
        for idx in result.items:
            observed[idx * buckets // n] += 1
    # 每个桶包含的元素数（n 不一定能被 buckets 整除）
    sizes = [0] * buckets
    for b in range(buckets):
        lo = -(-b * n // buckets)
        hi = -(-(b + 1) * n // buckets)
        sizes[b] = hi - lo
    per_element = trials * min(k, n) / float(n)
    expected = [per_element * s for s in sizes]
    return {"observed": observed, "expected": expected, "mean_draws": draws / float(max(1, trials))}


def weighted_inclusion_counts(weights: Sequence[float], k: int, trials: int, seed: int = 0) -> List[int]:
    observed = [0] * len(weights)
    sampler = WeightedReservoirSampler()
    pairs = [(w, i) for i, w in enumerate(weights)]
    for t in range(int(trials)):
        result = sampler.sample(SequenceCursor(pairs), k, PyRandomSource(seed + t))
        for idx in result.items:
            observed[idx] += 1
    return observed


def compare_uniform(n: int, k: int, trials: int, buckets: int = 100, seed: int = 0) -> Dict[str, Any]:
    counts = uniform_inclusion_counts(n, k, trials, buckets=buckets, seed=seed)
    test = chi_square(counts["observed"], counts["expected"])
    return {
        "mode": "uniform",
        "n": n,
        "k": k,
        "trials": trials,
        "buckets": len(counts["observed"]),
        "mean_draws": counts["mean_draws"],
        "chi2": test["chi2"],
        "dof": test["dof"],
        "z": test["z"],
        "ok": test["z"] < Z_CRITICAL,
    }


def compare_weighted_single(weights: Sequence[float], trials: int, seed: int = 0) -> Dict[str, Any]:
    """k = 1: P(i) = w_i / sum(w)."""
    observed = weighted_inclusion_counts(weights, 1, trials, seed=seed)
    total = float(sum(weights))
    expected = [trials * float(w) / total for w in weights]
    test = chi_square(observed, expected)
    return {
        "mode": "weighted",
        "n": len(weights),
        "k": 1,
        "trials": trials,
        "observed": observed,
        "expected": expected,
        "chi2": test["chi2"],
        "dof": test["dof"],
        "z": test["z"],
        "ok": test["z"] < Z_CRITICAL,
    }


def write_compare_results(path: str, rows: List[Dict[str, Any]]) -> str:
    """Write comparison rows as JSONL and return the file path."""
    d = os.path.dirname(os.path.abspath(path))
    os.makedirs(d, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        for r in rows:
            f.write(json.dumps(r, ensure_ascii=False) + "\n")
    return path
