from typing import List, Tuple

import numpy as np

from .photon_types import ExitRecord


class SlabTally:
    """单个 pass 的能量记账（未按光子数归一化）"""

    def __init__(self, size: int, record_exits: bool = False):
        self.R_d = 0.0        # 入射面出射
        self.T_t = 0.0        # 远面出射
        self.absorbed = 0.0   # 吸收扣掉的权重
        self.rr_killed = 0.0  # 轮盘赌终止时丢弃的权重
        self.rr_gained = 0.0  # 轮盘赌幸存时放大的权重
        self.dropped = 0.0    # 远面出射但落在网格外
        self.histogram = np.zeros((int(size), int(size)), dtype=np.float64)
        self._record_exits = record_exits
        self._exits: List[tuple] = []

    def add_absorb(self, a): self.absorbed += a

    def add_reflect(self, w): self.R_d += w

    def add_rr_kill(self, w): self.rr_killed += w

    def add_rr_gain(self, w): self.rr_gained += w

    def add_transmit(self, w, cell):
        self.T_t += w
        if cell is None:
            self.dropped += w
        else:
            xi, yi = cell
            self.histogram[yi, xi] += w

    def log_exit(self, x, y, z, ux, uy, uz, w, face):
        if self._record_exits:
            self._exits.append((x, y, z, ux, uy, uz, w, face))

    def exits(self):
        if not self._record_exits:
            return None
        return np.array(self._exits, dtype=ExitRecord)


class TrackRecorder:
    """
    轨迹采样器（可视化用），只记录前 max_tracks 个光子的 (x, z) 点列。
    """

    def __init__(self, max_tracks: int = 50, max_points: int = 20000):
        self.tracks: List[List[Tuple[float, float]]] = []
        self.sampled_steps: List[float] = []
        self.sampled_uz: List[float] = []
        self._max_tracks = int(max_tracks)
        self._max_points = int(max_points)
        self._n_points = 0
        self._active = False

    def _ok(self):
        return self._active and self._n_points < self._max_points

    def start_track(self):
        self._active = len(self.tracks) < self._max_tracks
        if self._active:
            self.tracks.append([])

    def log_pos(self, x: float, z: float):
        if self._ok():
            self.tracks[-1].append((float(x), float(z)))
            self._n_points += 1

    def log_step(self, s: float):
        if self._ok():
            self.sampled_steps.append(float(s))

    def log_uz(self, uz: float):
        if self._ok():
            self.sampled_uz.append(float(uz))
