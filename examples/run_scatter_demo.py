from slabmc.models.medium import SlabMedium
from slabmc.simulation.slab_pass import SlabSimConfig, run_pass

if __name__ == "__main__":
    cfg = SlabSimConfig(n_photons=20000, size=64, rng_seed=42)
    for g in (-0.5, 0.0, 0.5, 0.9):
        medium = SlabMedium(mu_a=1.0, mu_s=2.0, g=g, d=0.5)
        res = run_pass(medium, cfg)
        print(f"g={g:+.1f} -> Rd={res.reflectance:.3f}, Tt={res.transmittance:.3f}, "
              f"A={1.0 - res.reflectance - res.transmittance:.3f}")
