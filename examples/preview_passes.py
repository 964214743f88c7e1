# examples/preview_passes.py
# 逐 pass 刷新平均出射图像，直观看到噪声随 pass 数下降
import matplotlib.pyplot as plt

from slabmc.models.medium import SlabMedium
from slabmc.simulation.slab_pass import SlabSimConfig
from slabmc.simulation.passes import iter_passes, running_means
from slabmc.render.image import to_rgb


def main(n_passes=16):
    medium = SlabMedium(mu_a=1.0, mu_s=2.0, g=0.75, d=0.5)
    cfg = SlabSimConfig(n_photons=20000, size=128, rng_seed=7)

    fig, ax = plt.subplots()
    im = None
    for i, mean in running_means(iter_passes(medium, cfg, n_passes)):
        rgb = to_rgb(mean)
        if im is None:
            im = ax.imshow(rgb, origin="lower")
        else:
            im.set_data(rgb)
        ax.set_title(f"mean of {i} passes")
        plt.pause(0.01)
    plt.show()


if __name__ == "__main__":
    main()
