"""
结果落地（Reporting/Export Sinks）

用途
- 采样调用结束后把样本写到外部：Stdout/JSONL/CSV
- StdoutSink 与命令行工具的输出格式一致：每行一个样本

实现
- SampleSink 抽象类：统一 write_sample 接口
- StdoutSink：逐行打印样本
- JSONLSink：每次运行写一行 JSON（run_id、模式、样本、诊断计数）
- CSVSink：每个样本一行（run_id, rank, item）
"""

from __future__ import annotations
from typing import List, Dict, Any
import csv
import json
import logging
import os
import sys
import threading
import time

from reservoir_sampling.pipeline.types import SampleResult

logger = logging.getLogger(__name__)


def _to_jsonable(v: Any) -> Any:
    if isinstance(v, (list, dict, str, int, float, bool)) or v is None:
        return v
    try:
        return json.loads(json.dumps(v, default=str))
    except (TypeError, ValueError):
        return str(v)


def _ensure_parent(path: str) -> None:
    d = os.path.dirname(os.path.abspath(path))
    if d and not os.path.exists(d):
        os.makedirs(d, exist_ok=True)


def summarize(result: SampleResult, run_id: str) -> Dict[str, Any]:
    return {
        "run_id": run_id,
        "mode": result.mode,
        "requested": result.requested,
        "returned": len(result.items),
        "underfilled": result.underfilled,
        "seed": result.seed,
        "draws": result.draws,
        "consumed": result.consumed,
        "items": [_to_jsonable(x) for x in result.items],
    }


class SampleSink:
    def write_sample(self, result: SampleResult, run_id: str) -> None:
        raise NotImplementedError


class StdoutSink(SampleSink):
    def __init__(self, stream=None):
        self._stream = stream

    def write_sample(self, result: SampleResult, run_id: str) -> None:
        out = self._stream or sys.stdout
        for item in result.items:
            print(item, file=out)


class JSONLSink(SampleSink):
    def __init__(self, path: str, ensure_dir: bool = True):
        self.path = path
        if ensure_dir:
            _ensure_parent(path)
        self._lock = threading.Lock()

    def write_sample(self, result: SampleResult, run_id: str) -> None:
        row = summarize(result, run_id)
        row["write_ts"] = time.time()
        with self._lock:
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(json.dumps(row, ensure_ascii=False) + "\n")


class CSVSink(SampleSink):
    fields = ["run_id", "rank", "item"]

    def __init__(self, path: str, ensure_dir: bool = True):
        self.path = path
        if ensure_dir:
            _ensure_parent(path)
        self._lock = threading.Lock()
        # 若文件不存在则写表头
        if not os.path.exists(path):
            with open(path, "w", newline="", encoding="utf-8") as f:
                csv.DictWriter(f, fieldnames=self.fields).writeheader()

    def write_sample(self, result: SampleResult, run_id: str) -> None:
        with self._lock:
            with open(self.path, "a", newline="", encoding="utf-8") as f:
                w = csv.DictWriter(f, fieldnames=self.fields)
                for rank, item in enumerate(result.items):
                    w.writerow({"run_id": run_id, "rank": rank, "item": item})


def build_sinks_from_config(cfg: Dict[str, Any]) -> List[SampleSink]:
    """
    根据配置构建 sinks 列表；未配置任何 sink 时默认输出到 stdout
    示例：
    reporting:
      sinks:
        - type: "stdout"
        - type: "jsonl"
          path: "out/samples.jsonl"
        - type: "csv"
          path: "out/samples.csv"
    """
    out: List[SampleSink] = []
    reporting = cfg.get("reporting", {}) or {}
    sinks = reporting.get("sinks", []) or []
    for s in sinks:
        t = (s.get("type") or "").lower()
        if t == "stdout":
            out.append(StdoutSink())
        elif t == "jsonl":
            out.append(JSONLSink(path=s["path"]))
        elif t == "csv":
            out.append(CSVSink(path=s["path"]))
        else:
            logger.warning("Unknown sink type: %r", t)
    if not out:
        out.append(StdoutSink())
    return out
