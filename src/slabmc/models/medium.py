# src/slabmc/models/medium.py
from __future__ import annotations
from dataclasses import dataclass
import math


@dataclass
class SlabMedium:
    """单层平板介质的光学参数（横向无限，z ∈ [0, d] 为介质内部）"""
    mu_a: float   # 吸收系数 σa
    mu_s: float   # 散射系数 σs
    g: float      # HG 各向异性因子，(-1, 1)
    d: float      # 平板厚度

    @property
    def mu_t(self) -> float:
        return self.mu_a + self.mu_s

    @property
    def albedo(self) -> float:
        """单次散射反照率 σs/σt"""
        return self.mu_s / self.mu_t

    def validate(self) -> "SlabMedium":
        """
        参数检查，非法时抛 ValueError。
        在一次 pass 开始前调用，避免仿真中途才暴露配置错误。
        """
        if not (self.mu_a >= 0.0):
            raise ValueError(f"mu_a must be >= 0, got {self.mu_a}")
        if not (self.mu_s >= 0.0):
            raise ValueError(f"mu_s must be >= 0, got {self.mu_s}")
        if not (self.mu_t > 0.0) or math.isinf(self.mu_t):
            raise ValueError(f"mu_t = mu_a + mu_s must be finite and > 0, got {self.mu_t}")
        if not (self.d > 0.0):
            raise ValueError(f"slab thickness d must be > 0, got {self.d}")
        if not (-1.0 < self.g < 1.0):
            raise ValueError(f"anisotropy g must lie in (-1, 1), got {self.g}")
        return self
