"""
主程序入口
- 功能：加载配置，读取 stdin/文件逐行构造数据流，调用 SamplingPipeline.run 并输出样本
- 用法：
    reservoir-sample -s 10 < lines.txt
    reservoir-sample -s 4 --seed 7 -w weights.txt items.txt
"""
import argparse
import logging
import os
import sys
from typing import Any, Dict, List, Optional

import yaml

from reservoir_sampling.modules.io.readers import read_lines, read_weights
from reservoir_sampling.pipeline.pipeline import SamplingPipeline

DEFAULT_CONFIG = "configs/config.yaml"


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    # 默认路径不存在时视为空配置；显式给出的路径必须存在
    if path is None:
        if not os.path.exists(DEFAULT_CONFIG):
            return {}
        path = DEFAULT_CONFIG
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="reservoir-sample", description="Single-pass reservoir sampling of input lines.")
    ap.add_argument("input", nargs="?", default=None, help="input file (default: stdin)")
    ap.add_argument("-s", "--size", type=int, default=None, help="sample size k (default: 10)")
    ap.add_argument("-w", "--weights", default=None, help="file with one weight per line; enables weighted sampling")
    ap.add_argument("--seed", type=int, default=None, help="seed for a reproducible sample")
    ap.add_argument("--config", default=None, help=f"YAML config (default: {DEFAULT_CONFIG} if present)")
    ap.add_argument("--log-level", default=None, help="logging level (default from config, else WARNING)")
    return ap


def apply_overrides(cfg: Dict[str, Any], args: argparse.Namespace) -> Dict[str, Any]:
    sp = dict(cfg.get("sampling", {}) or {})
    if args.size is not None:
        sp["size"] = args.size
    if args.seed is not None:
        sp["seed"] = args.seed
    if args.weights is not None:
        sp["mode"] = "weighted"
    cfg = dict(cfg)
    cfg["sampling"] = sp
    return cfg


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    cfg = apply_overrides(load_config(args.config), args)

    level = args.log_level or (cfg.get("logging", {}) or {}).get("level", "WARNING")
    logging.basicConfig(level=str(level).upper(), stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")

    in_cfg = cfg.get("input", {}) or {}
    encoding = str(in_cfg.get("encoding", "utf-8"))
    lines = read_lines(args.input, encoding=encoding, strip_newline=bool(in_cfg.get("strip_newline", True)))
    weights = read_weights(args.weights, encoding=encoding) if args.weights else None

    if weights is None and str(cfg["sampling"].get("mode", "uniform")).lower() == "weighted":
        print("error: weighted mode needs --weights", file=sys.stderr)
        return 2

    try:
        pipe = SamplingPipeline(cfg)
        pipe.run(lines, weights=weights)
    except (ValueError, OSError) as e:
        # InvalidWeight, malformed weight file, bad config values, unreadable input
        print(f"error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
