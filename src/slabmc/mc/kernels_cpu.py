import math
from typing import Optional, Tuple

# 数值容差
G_ISOTROPIC_EPS = 1e-6   # |g| 小于此值按各向同性处理
COS_TOL = 1e-9           # cosθ 允许的舍入越界量
POLE_EPS = 1e-9          # 1 - |uz| 小于此值走极轴分支
NORM_TOL = 1e-6          # 方向向量长度允许偏差

Direction = Tuple[float, float, float]


# --- HG 采样与方向旋转 ---

def sample_hg_cos_theta(g: float, u: float) -> float:
    """
    采样 Henyey-Greenstein 相函数的 cos(theta)，u~U[0,1)。

    g≈0 时退化为各向同性：cosθ = 2u - 1。
    否则用标准逆 CDF：
        mu   = (1 - g²) / (1 - g + 2gu)
        cosθ = (1 + g² - mu²) / (2g)
    结果超出 [-1,1] 视为缺陷直接报错，不做截断（截断会让统计有偏）；
    仅把 COS_TOL 以内的舍入误差归到 ±1。
    """
    if abs(g) < G_ISOTROPIC_EPS:
        cos_theta = 2.0 * u - 1.0
    else:
        mu = (1.0 - g*g) / (1.0 - g + 2.0*g*u)
        cos_theta = (1.0 + g*g - mu*mu) / (2.0*g)
    if not (-1.0 <= cos_theta <= 1.0):
        # NaN 也会进入此分支
        if not (abs(cos_theta) - 1.0 <= COS_TOL):
            raise FloatingPointError(
                f"HG cos(theta) out of range: {cos_theta!r} (g={g}, u={u})"
            )
        cos_theta = math.copysign(1.0, cos_theta)
    return cos_theta


def sample_phi(u: float) -> float:
    return 2.0 * math.pi * u


def rotate_direction(ux: float, uy: float, uz: float,
                     cos_t: float, phi: float) -> Direction:
    """把 (ux,uy,uz) 按 (theta,phi) 绕自身旋转（Rodrigues），返回新方向。

    |uz|≈1 时通用公式分母 sqrt(1-uz²)→0，改走两个极轴分支。
    """
    if not (-1.0 <= cos_t <= 1.0):
        raise FloatingPointError(f"cos(theta) out of [-1, 1]: {cos_t!r}")
    sin_t = math.sqrt(1.0 - cos_t*cos_t)
    cos_p, sin_p = math.cos(phi), math.sin(phi)

    if 1.0 - uz < POLE_EPS:
        return sin_t * cos_p, sin_t * sin_p, cos_t
    if 1.0 + uz < POLE_EPS:
        return sin_t * cos_p, -sin_t * sin_p, -cos_t

    denom = math.sqrt(1.0 - uz*uz)
    uz_cos_p = uz * cos_p
    ux_p = sin_t * (ux * uz_cos_p - uy * sin_p) / denom + ux * cos_t
    uy_p = sin_t * (uy * uz_cos_p + ux * sin_p) / denom + uy * cos_t
    uz_p = -denom * sin_t * cos_p + uz * cos_t

    # 归一化抑制漂移
    norm = math.sqrt(ux_p*ux_p + uy_p*uy_p + uz_p*uz_p)
    return ux_p/norm, uy_p/norm, uz_p/norm


def check_unit(ux: float, uy: float, uz: float, tol: float = NORM_TOL) -> float:
    """方向向量长度检查，偏离 1 超过 tol 时抛 ValueError；返回长度。"""
    norm = math.sqrt(ux*ux + uy*uy + uz*uz)
    if not abs(norm - 1.0) <= tol:
        raise ValueError(f"direction ({ux}, {uy}, {uz}) is not unit length (|u|={norm})")
    return norm


def scatter(ux: float, uy: float, uz: float, g: float, rng) -> Direction:
    """
    一次散射事件：先抽 cosθ，再抽 φ（恰好两个随机数），然后旋转方向。
    rng 需提供 .random() -> float（[0,1) 均匀）。
    """
    check_unit(ux, uy, uz)
    cos_t = sample_hg_cos_theta(g, rng.random())
    phi = sample_phi(rng.random())
    return rotate_direction(ux, uy, uz, cos_t, phi)


# --- 步长、边界与计数网格 ---

def sample_free_path(u: float, mu_t: float) -> float:
    """指数分布步长采样 s = -ln(u)/σt（Beer-Lambert）"""
    return -math.log(max(1e-12, u)) / mu_t


def distance_to_boundary(z: float, uz: float, d: float) -> float:
    """
    沿当前方向到平板边界的距离。
    uz>0 → 远面 z=d；uz<0 → 入射面 z=0；uz==0 平行于两面，永不撞界（inf）。
    """
    if uz > 0.0:
        return (d - z) / uz
    if uz < 0.0:
        return -z / uz
    return math.inf


def exit_bin(x: float, y: float, size: int, extent: float) -> Optional[Tuple[int, int]]:
    """
    把出射点 (x,y) 映射到 size×size 网格（物理宽度 extent，以原点为中心）。
    越界返回 None。
    """
    half = 0.5 * extent
    xi = math.floor((x + half) / extent * size)
    yi = math.floor((y + half) / extent * size)
    if 0 <= xi < size and 0 <= yi < size:
        return xi, yi
    return None
