# src/slabmc/simulation/passes.py
from __future__ import annotations
from dataclasses import dataclass
import logging
import warnings
from typing import Iterable, Iterator, Tuple

import numpy as np
from tqdm import tqdm

from ..models.medium import SlabMedium
from ..mc.rng import spawn_streams
from .slab_pass import SlabSimConfig, PassResult, run_pass

log = logging.getLogger(__name__)

# 远面出射权重落在网格外的比例超过此值时给出警告
DROP_WARN_FRACTION = 0.05


@dataclass
class MultiPassResult:
    total: PassResult   # 各 pass 求和
    n_passes: int

    @property
    def mean_histogram(self) -> np.ndarray:
        return self.total.histogram / self.n_passes

    @property
    def reflectance(self) -> float:
        return self.total.reflectance

    @property
    def transmittance(self) -> float:
        return self.total.transmittance


def combine_results(results: Iterable[PassResult]) -> PassResult:
    """
    归约：把多个 pass（或多个 worker）的结果求和。
    直方图与所有标量逐项相加，光子数累加；exits 只有全部都记录时才拼接。
    """
    results = list(results)
    if not results:
        raise ValueError("combine_results needs at least one PassResult")
    shape = results[0].histogram.shape
    for r in results[1:]:
        if r.histogram.shape != shape:
            raise ValueError(f"histogram shape mismatch: {r.histogram.shape} vs {shape}")

    histogram = np.zeros(shape, dtype=np.float64)
    for r in results:
        histogram += r.histogram

    if all(r.exits is not None for r in results):
        exits = np.concatenate([r.exits for r in results])
    else:
        exits = None

    return PassResult(
        histogram=histogram,
        Rd=sum(r.Rd for r in results),
        Tt=sum(r.Tt for r in results),
        n_photons=sum(r.n_photons for r in results),
        absorbed=sum(r.absorbed for r in results),
        rr_killed=sum(r.rr_killed for r in results),
        rr_gained=sum(r.rr_gained for r in results),
        dropped=sum(r.dropped for r in results),
        exits=exits,
    )


def iter_passes(medium: SlabMedium, config: SlabSimConfig, n_passes: int,
                progress: bool = False) -> Iterator[PassResult]:
    """
    逐个产出 pass 结果。每个 pass 用由 config.rng_seed 派生的独立随机流，
    因此第 i 个 pass 的结果只取决于 (seed, i)，可单独复现。
    """
    if n_passes <= 0:
        raise ValueError(f"n_passes must be > 0, got {n_passes}")
    medium.validate()
    config.validate()
    streams = spawn_streams(config.rng_seed, n_passes)
    return _iter_passes(medium, config, streams, progress)


def _iter_passes(medium, config, streams, progress):
    n_passes = len(streams)
    for i, rng in enumerate(tqdm(streams, disable=not progress, desc="passes")):
        result = run_pass(medium, config, rng=rng)
        log.debug("pass %d/%d finished", i + 1, n_passes)
        yield result


def running_means(results: Iterable[PassResult]) -> Iterator[Tuple[int, np.ndarray]]:
    """
    渐进显示用：每完成一个 pass 产出 (已完成 pass 数, 当前平均直方图)。
    """
    acc = None
    for i, r in enumerate(results, start=1):
        if acc is None:
            acc = np.zeros_like(r.histogram, dtype=np.float64)
        acc += r.histogram
        yield i, acc / i


def run_passes(medium: SlabMedium,
               config: SlabSimConfig,
               n_passes: int,
               progress: bool = False) -> MultiPassResult:
    """
    多次 pass 并合并：返回 MultiPassResult（总和 + 平均直方图 + 归一化 Rd/Tt）。
    """
    results = list(iter_passes(medium, config, n_passes, progress=progress))
    out = MultiPassResult(total=combine_results(results), n_passes=n_passes)

    total = out.total
    if total.Tt > 0.0 and total.dropped / total.Tt > DROP_WARN_FRACTION:
        warnings.warn(
            f"{100.0 * total.dropped / total.Tt:.1f}% of transmitted weight fell outside "
            f"the {config.extent} wide grid; consider a larger extent",
            RuntimeWarning,
            stacklevel=2,
        )
    log.info("%d passes, N=%d: Rd=%.6f Tt=%.6f",
             n_passes, total.n_photons, out.reflectance, out.transmittance)
    return out
