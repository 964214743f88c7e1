# src/slabmc/simulation/slab_pass.py
from __future__ import annotations
from dataclasses import dataclass
import logging
import numbers
from typing import Optional

import numpy as np
from tqdm import trange

from ..models.medium import SlabMedium
from ..mc.rng import UniformStream
from ..mc.tallies import SlabTally, TrackRecorder
from ..mc.photon_types import FACE_NEAR, FACE_FAR
from ..mc.kernels_cpu import (
    sample_free_path, distance_to_boundary, exit_bin, scatter,
)

log = logging.getLogger(__name__)


@dataclass
class SlabSimConfig:
    n_photons: int = 1_000_000
    size: int = 512              # 输出网格 size×size
    extent: float = 2.0          # 网格覆盖的物理宽度（以入射点为中心）
    rr_threshold: float = 1e-3   # 权重低于此值触发俄罗斯轮盘
    rr_m: int = 10               # 幸存概率 1/m，幸存后权重 ×m
    rng_seed: Optional[int] = 1234
    max_steps: Optional[int] = None
    bin_at_face: bool = False    # True：先把出射点投影到远面再分箱
    record_exits: bool = False

    def validate(self) -> "SlabSimConfig":
        # 计数类参数必须是整数，否则会在仿真中途才出错
        for name in ("n_photons", "size", "rr_m"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        if self.max_steps is not None and (
                isinstance(self.max_steps, bool) or not isinstance(self.max_steps, numbers.Integral)):
            raise ValueError(f"max_steps must be an integer or None, got {self.max_steps!r}")
        if self.n_photons <= 0:
            raise ValueError(f"n_photons must be > 0, got {self.n_photons}")
        if self.size <= 0:
            raise ValueError(f"size must be > 0, got {self.size}")
        if not (self.extent > 0.0):
            raise ValueError(f"extent must be > 0, got {self.extent}")
        if not (0.0 < self.rr_threshold <= 1.0):
            raise ValueError(f"rr_threshold must lie in (0, 1], got {self.rr_threshold}")
        if self.rr_m < 1:
            raise ValueError(f"rr_m must be >= 1, got {self.rr_m}")
        if self.max_steps is not None and self.max_steps <= 0:
            raise ValueError(f"max_steps must be > 0 or None, got {self.max_steps}")
        return self


@dataclass
class PassResult:
    """
    一次 pass 的结果。Rd / Tt / histogram 都是未归一化的权重和，
    跨 pass 合并后由调用方除以总光子数（或 pass 数）。
    """
    histogram: np.ndarray    # [yi, xi]，仅远面出射
    Rd: float
    Tt: float
    n_photons: int
    absorbed: float = 0.0
    rr_killed: float = 0.0
    rr_gained: float = 0.0
    dropped: float = 0.0     # 远面出射但落在网格外的权重
    exits: Optional[np.ndarray] = None

    @property
    def reflectance(self) -> float:
        return self.Rd / self.n_photons

    @property
    def transmittance(self) -> float:
        return self.Tt / self.n_photons

    @property
    def histogram_mass(self) -> float:
        return float(self.histogram.sum())

    def energy_residual(self) -> float:
        """N - (Rd + Tt + A + 轮盘赌丢弃 - 轮盘赌放大)，正确记账时≈0"""
        return self.n_photons - (self.Rd + self.Tt + self.absorbed
                                 + self.rr_killed - self.rr_gained)


def run_pass(medium: SlabMedium,
             config: SlabSimConfig,
             rng=None,
             tracks: Optional[TrackRecorder] = None,
             progress: bool = False) -> PassResult:
    """
    平板介质单次 pass：N 个光子各自独立随机游走。
    返回 PassResult(histogram, Rd, Tt, ...)。

    每个光子：
      1. 位置 (0,0,0)，方向 (0,0,1)，权重 1
      2. 采样步长 s = -ln(u)/σt
      3. s 超过到边界的距离 → 出射：
           uz>0 远面 → Tt，并写入网格（仅此方向写网格）
           否则入射面 → Rd
         否则前进 s
      4. 吸收：w -= σa/σt（截到 ≥0）；w 过小时俄罗斯轮盘
      5. 仍存活则按 HG 相函数散射，回到 2

    rng: 提供 .random() -> float 的对象；为 None 时按 config.rng_seed 新建。
    tracks: 可选 TrackRecorder，用于轨迹可视化。
    """
    medium.validate()
    config.validate()
    if rng is None:
        rng = UniformStream(config.rng_seed)

    mu_t, g, d = medium.mu_t, medium.g, medium.d
    dw = medium.mu_a / mu_t
    m = config.rr_m
    p_survive = 1.0 / m
    rr_threshold = config.rr_threshold
    size, extent = config.size, config.extent
    bin_at_face = config.bin_at_face
    max_steps = config.max_steps

    log.debug("run_pass: %s, %s", medium, config)
    tally = SlabTally(size=size, record_exits=config.record_exits)

    for _ in trange(config.n_photons, disable=not progress, desc="slab MC"):
        if tracks is not None:
            tracks.start_track()
            tracks.log_pos(0.0, 0.0)

        x, y, z = 0.0, 0.0, 0.0
        ux, uy, uz = 0.0, 0.0, 1.0
        w = 1.0

        steps = 0
        while w > 0.0:
            steps += 1
            if max_steps is not None and steps > max_steps:
                raise RuntimeError(
                    f"photon walk exceeded max_steps={max_steps} "
                    f"(z={z}, uz={uz}, w={w})"
                )

            # 1) 自由程
            s = sample_free_path(rng.random(), mu_t)

            # 2) 出射判定
            dist = distance_to_boundary(z, uz, d)
            if s > dist:
                if uz > 0.0:
                    if bin_at_face:
                        cell = exit_bin(x + ux * dist, y + uy * dist, size, extent)
                    else:
                        cell = exit_bin(x, y, size, extent)
                    tally.add_transmit(w, cell)
                    face = FACE_FAR
                else:
                    tally.add_reflect(w)
                    face = FACE_NEAR
                tally.log_exit(x, y, z, ux, uy, uz, w, face)
                break

            x += s * ux
            y += s * uy
            z += s * uz
            if tracks is not None:
                tracks.log_step(s)
                tracks.log_pos(x, z)

            # 3) 吸收
            absorb = dw if dw < w else w
            w -= absorb
            tally.add_absorb(absorb)

            # 4) 俄罗斯轮盘
            if w < rr_threshold:
                if rng.random() > p_survive:
                    tally.add_rr_kill(w)
                    break
                tally.add_rr_gain((m - 1) * w)
                w *= m

            # 5) 散射
            if w > 0.0:
                ux, uy, uz = scatter(ux, uy, uz, g, rng)
                if tracks is not None:
                    tracks.log_uz(uz)

    result = PassResult(
        histogram=tally.histogram,
        Rd=tally.R_d,
        Tt=tally.T_t,
        n_photons=int(config.n_photons),
        absorbed=tally.absorbed,
        rr_killed=tally.rr_killed,
        rr_gained=tally.rr_gained,
        dropped=tally.dropped,
        exits=tally.exits(),
    )
    log.info("pass done: N=%d Rd=%.6f Tt=%.6f",
             result.n_photons, result.reflectance, result.transmittance)
    return result
