# examples/plot_convergence_small.py
import numpy as np
import matplotlib.pyplot as plt

from slabmc.models.medium import SlabMedium
from slabmc.simulation.slab_pass import SlabSimConfig, run_pass


def main():
    medium = SlabMedium(mu_a=1.0, mu_s=2.0, g=0.75, d=0.5)
    Ns = np.unique(np.round(np.logspace(2, 4.5, 10)).astype(int))
    Rds, Tts = [], []
    for n in Ns:
        res = run_pass(medium, SlabSimConfig(n_photons=int(n), size=16, rng_seed=42))
        Rds.append(res.reflectance)
        Tts.append(res.transmittance)

    plt.figure()
    plt.plot(Ns, Rds, marker='o', label='Rd')
    plt.plot(Ns, Tts, marker='s', label='Tt')
    plt.xscale('log')
    plt.xlabel('Photon count'); plt.ylabel('fraction')
    plt.title('Rd / Tt convergence')
    plt.grid(True, which='both'); plt.legend(); plt.tight_layout()
    plt.show()


if __name__ == "__main__":
    main()
