# examples/run_slab_image.py
# 多 pass 仿真 → 平均直方图 → 彩色图像（out.ppm / out.png）
import logging

from slabmc.models.medium import SlabMedium
from slabmc.simulation.slab_pass import SlabSimConfig
from slabmc.simulation.passes import run_passes
from slabmc.render.image import to_rgb, write_ppm, save_png

N_PASSES = 64


def main():
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    medium = SlabMedium(mu_a=1.0, mu_s=2.0, g=0.75, d=0.5)
    # 每个 pass 1e6 光子在纯 Python 下很慢，这里缩小到 1e5
    cfg = SlabSimConfig(n_photons=100_000, size=512, extent=2.0, rng_seed=1234)

    out = run_passes(medium, cfg, N_PASSES, progress=True)
    print(f"Rd {out.reflectance:f} Tt {out.transmittance:f}")

    rgb = to_rgb(out.mean_histogram)
    write_ppm("out.ppm", rgb)
    save_png("out.png", rgb)
    print("Simulation done.")


if __name__ == "__main__":
    main()
