# examples/visualize_slab.py
import numpy as np
import matplotlib.pyplot as plt

from slabmc.models.medium import SlabMedium
from slabmc.simulation.slab_pass import SlabSimConfig, run_pass
from slabmc.mc.tallies import TrackRecorder


def collect_single_run(medium: SlabMedium, N=20000, seed=42, max_tracks=60):
    """跑一次 pass，采集步长、uz、轨迹与出射网格。"""
    tracks = TrackRecorder(max_tracks=max_tracks, max_points=50000)
    cfg = SlabSimConfig(n_photons=N, size=128, rng_seed=seed)
    res = run_pass(medium, cfg, tracks=tracks, progress=True)
    return tracks, res


def plot_all_in_one(medium, tracks, res):
    fig, axes = plt.subplots(2, 2, figsize=(11, 8))

    # 1) Step length distribution
    ax = axes[0, 0]
    s = np.asarray(tracks.sampled_steps, dtype=float)
    if s.size == 0:
        ax.text(0.5, 0.5, "no steps collected", ha="center", va="center")
    else:
        ax.hist(s, bins=60, density=True, alpha=0.6, label="sampled")
        xs = np.linspace(0.0, max(1e-6, np.percentile(s, 99.5)), 300)
        ax.plot(xs, medium.mu_t * np.exp(-medium.mu_t * xs), lw=2, label=r"theory Exp($\sigma_t$)")
        ax.set_xlabel("step s"); ax.set_ylabel("pdf")
        ax.set_title("Step length distribution"); ax.legend()

    # 2) uz distribution
    ax = axes[0, 1]
    uz = np.asarray(tracks.sampled_uz, dtype=float)
    if uz.size == 0:
        ax.text(0.5, 0.5, "no uz collected", ha="center", va="center")
    else:
        ax.hist(uz, bins=60, density=True, alpha=0.7)
        ax.set_xlabel("uz"); ax.set_ylabel("pdf")
        ax.set_title(f"uz after scattering (g={medium.g})")

    # 3) Photon tracks (x–z)
    ax = axes[1, 0]
    for t in tracks.tracks:
        if len(t) > 1:
            x, z = zip(*t)
            ax.plot(x, z, lw=0.7)
    ax.axhline(0.0, color="k", lw=0.8)
    ax.axhline(medium.d, color="k", lw=0.8)
    ax.invert_yaxis()  # z 向下
    ax.set_xlabel("x"); ax.set_ylabel("z")
    ax.set_title("Sample photon tracks (x–z)")

    # 4) Transmitted exit pattern
    ax = axes[1, 1]
    ax.imshow(res.histogram, origin="lower", extent=(-1, 1, -1, 1), cmap="viridis")
    ax.set_title(f"Far-face exits  Rd={res.reflectance:.3f} Tt={res.transmittance:.3f}")
    ax.set_xlabel("x"); ax.set_ylabel("y")

    plt.tight_layout()
    return fig


if __name__ == "__main__":
    medium = SlabMedium(mu_a=1.0, mu_s=2.0, g=0.75, d=0.5)
    tracks, res = collect_single_run(medium)
    print(f"single run: Rd={res.reflectance:.6f}, Tt={res.transmittance:.6f}")
    plot_all_in_one(medium, tracks, res)
    plt.show()
