# src/slabmc/mc/rng.py
from __future__ import annotations
from typing import List, Optional, Union

import numpy as np

SeedLike = Union[None, int, np.random.SeedSequence]


class UniformStream:
    """
    均匀分布 [0,1) 随机数源，提供 .random() -> float 接口。

    内核只依赖 .random()，任何满足"独立、均匀 [0,1)"的对象都可以替换它
    （例如测试里的固定序列）。这里按块从 numpy Generator 取数，
    再逐个以 Python float 交出，避免每次调用 Generator.random() 的开销。
    同一 seed 得到的序列与逐个调用 Generator.random() 完全一致。
    """

    def __init__(self, seed: SeedLike = None, block: int = 8192,
                 generator: Optional[np.random.Generator] = None):
        if block <= 0:
            raise ValueError("block must be > 0")
        self._gen = generator if generator is not None else np.random.default_rng(seed)
        self._block = int(block)
        self._buf: List[float] = []
        self._pos = 0

    @property
    def generator(self) -> np.random.Generator:
        return self._gen

    def random(self) -> float:
        if self._pos >= len(self._buf):
            self._buf = self._gen.random(self._block).tolist()
            self._pos = 0
        u = self._buf[self._pos]
        self._pos += 1
        return u


def spawn_streams(seed: SeedLike, n: int, block: int = 8192) -> List[UniformStream]:
    """
    由一个根 seed 派生 n 条相互独立的随机流（SeedSequence.spawn）。
    每个 pass / worker 各用一条，结果按流可复现，互不争用。
    """
    if n <= 0:
        raise ValueError("n must be > 0")
    root = seed if isinstance(seed, np.random.SeedSequence) else np.random.SeedSequence(seed)
    return [UniformStream(child, block=block) for child in root.spawn(n)]
