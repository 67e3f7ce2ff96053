"""
Check empirical inclusion frequencies of both samplers against their targets
- uniform: chi-squared over bucketed indices of range(n), expected k/n per element
- weighted (k = 1): chi-squared over items, expected w_i / sum(w)

Usage:
  python -m reservoir_sampling.scripts.check_inclusion --n 1000000 --k 7 --trials 2000 --out out/compare.jsonl
"""

import argparse
import json
import sys

from reservoir_sampling.modules.testing.compare import compare_uniform, compare_weighted_single, write_compare_results
from reservoir_sampling.modules.testing.fake_stream_generator import fake_weights


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--n", type=int, default=1_000_000, help="length of the integer stream")
    ap.add_argument("--k", type=int, default=7, help="sample size for the uniform check")
    ap.add_argument("--trials", type=int, default=2000)
    ap.add_argument("--buckets", type=int, default=100)
    ap.add_argument("--weighted-n", type=int, default=8, help="number of items in the weighted check")
    ap.add_argument("--profile", default="uniform", choices=["constant", "uniform", "pareto"])
    ap.add_argument("--seed", type=int, default=0)
    ap.add_argument("--out", default=None, help="optional JSONL report path")
    args = ap.parse_args()

    rows = [
        compare_uniform(args.n, args.k, args.trials, buckets=args.buckets, seed=args.seed),
        compare_weighted_single(
            fake_weights(args.weighted_n, profile=args.profile, seed=args.seed),
            args.trials,
            seed=args.seed,
        ),
    ]
    for r in rows:
        print(json.dumps({k: v for k, v in r.items() if k not in ("observed", "expected")}))
    if args.out:
        print(f"Compare report written: {write_compare_results(args.out, rows)}")
    return 0 if all(r["ok"] for r in rows) else 1


if __name__ == "__main__":
    sys.exit(main())
