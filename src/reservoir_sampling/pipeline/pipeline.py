"""
Sampling pipeline (config → cursor → sampler → sinks)

Purpose
- Glue the sampling core to its collaborators: build the RandomSource from the
  seeding policy, wrap the input in a cursor, run exactly one sampler, and write
  the result to the configured reporting sinks.

Notes
- One run() is one blocking call that drains the stream; nothing is kept between runs
  except the RandomSource, whose state keeps advancing (a seeded pipeline that runs
  twice gives two different samples; build a new pipeline to repeat a run).

Config keys (recommended)
- sampling: { size: 10, mode: "uniform" | "weighted", seed: null }
- reporting.sinks: see modules/reporting/sink.py docstring
"""

import logging
import time
from typing import Any, Dict, Iterable, List, Optional

from reservoir_sampling.modules.io.readers import zip_weighted
from reservoir_sampling.modules.reporting.sink import SampleSink, build_sinks_from_config
from reservoir_sampling.modules.sampling.cursor import IterableCursor
from reservoir_sampling.modules.sampling.random_source import PyRandomSource
from reservoir_sampling.modules.sampling.reservoir import WeightedReservoirSampler
from reservoir_sampling.modules.sampling.uniform import UniformReservoirSampler
from reservoir_sampling.pipeline.types import SampleResult

logger = logging.getLogger(__name__)

SAMPLERS = {
    "uniform": UniformReservoirSampler,
    "weighted": WeightedReservoirSampler,
}


class SamplingPipeline:
    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.cfg = config or {}

        sp = self.cfg.get("sampling", {}) or {}
        self.size = int(sp.get("size", 10))
        if self.size < 0:
            raise ValueError(f"sampling.size must be >= 0, got {self.size}")
        self.mode = str(sp.get("mode", "uniform")).lower()
        if self.mode not in SAMPLERS:
            raise ValueError(f"unknown sampling.mode {self.mode!r}; expected one of {sorted(SAMPLERS)}")
        seed = sp.get("seed", None)
        self.seed = None if seed is None else int(seed)

        # seed 为 None → 系统熵；否则结果可复现
        self.rng = PyRandomSource(self.seed)

        # Reporting sinks
        self.reporting_sinks: List[SampleSink] = build_sinks_from_config(self.cfg)

    def run(self, stream: Iterable[Any], weights: Optional[Iterable[float]] = None,
            run_id: Optional[str] = None) -> SampleResult:
        """
        - weights 为 None：按 sampling.mode 采样（weighted 模式下 stream 需产出 (weight, item)）
        - weights 给定：与 stream 按位置配对，使用加权采样
        """
        mode = self.mode
        if weights is not None:
            stream = zip_weighted(weights, stream)
            mode = "weighted"
        run_id = run_id or f"run-{time.strftime('%Y-%m-%dT%H:%M:%S', time.gmtime())}"

        sampler = SAMPLERS[mode]()
        result = sampler.sample(IterableCursor(stream), self.size, self.rng)
        logger.info(
            "run=%s mode=%s requested=%d returned=%d consumed=%d draws=%d",
            run_id, mode, result.requested, len(result.items), result.consumed, result.draws,
        )

        for sink in self.reporting_sinks:
            try:
                sink.write_sample(result, run_id)
            except Exception as e:
                logger.error("write_sample failed for %s: %s", type(sink).__name__, e)
        return result
