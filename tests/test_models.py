import math

import pytest

from slabmc.models.medium import SlabMedium
from slabmc.simulation.slab_pass import SlabSimConfig


def test_medium_derived_properties():
    m = SlabMedium(mu_a=1.0, mu_s=2.0, g=0.75, d=0.5)
    assert m.mu_t == 3.0
    assert m.albedo == pytest.approx(2.0 / 3.0)
    assert m.validate() is m


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(mu_a=-0.1, mu_s=1.0, g=0.0, d=1.0),
        dict(mu_a=0.0, mu_s=-1.0, g=0.0, d=1.0),
        dict(mu_a=0.0, mu_s=0.0, g=0.0, d=1.0),          # sigma_t = 0
        dict(mu_a=1.0, mu_s=math.inf, g=0.0, d=1.0),
        dict(mu_a=1.0, mu_s=1.0, g=0.0, d=0.0),
        dict(mu_a=1.0, mu_s=1.0, g=1.0, d=1.0),
        dict(mu_a=1.0, mu_s=1.0, g=-1.0, d=1.0),
        dict(mu_a=1.0, mu_s=1.0, g=float("nan"), d=1.0),
    ]
)
def test_medium_validate_rejects(kwargs):
    with pytest.raises(ValueError):
        SlabMedium(**kwargs).validate()


def test_semi_infinite_medium_is_valid():
    SlabMedium(mu_a=0.1, mu_s=1.0, g=0.9, d=math.inf).validate()


def test_config_defaults_match_reference_run():
    cfg = SlabSimConfig()
    assert cfg.n_photons == 1_000_000
    assert cfg.size == 512
    assert cfg.extent == 2.0
    assert cfg.rr_m == 10
    assert cfg.rr_threshold == 1e-3
    assert cfg.validate() is cfg


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(n_photons=0),
        dict(n_photons=-5),
        dict(size=0),
        dict(extent=0.0),
        dict(rr_threshold=0.0),
        dict(rr_threshold=2.0),
        dict(rr_m=0),
        dict(max_steps=0),
        dict(size=2.5),
        dict(n_photons=1e3),
        dict(rr_m=10.0),
        dict(max_steps=5.5),
    ]
)
def test_config_validate_rejects(kwargs):
    with pytest.raises(ValueError):
        SlabSimConfig(**kwargs).validate()
