"""slabmc: Monte Carlo light transport through a scattering/absorbing slab."""

__version__ = "0.1.0"

from .models.medium import SlabMedium
from .mc.rng import UniformStream, spawn_streams
from .mc.kernels_cpu import sample_hg_cos_theta, scatter
from .simulation.slab_pass import SlabSimConfig, PassResult, run_pass
from .simulation.passes import MultiPassResult, combine_results, iter_passes, run_passes

__all__ = [
    "__version__",
    "SlabMedium",
    "UniformStream",
    "spawn_streams",
    "sample_hg_cos_theta",
    "scatter",
    "SlabSimConfig",
    "PassResult",
    "run_pass",
    "MultiPassResult",
    "combine_results",
    "iter_passes",
    "run_passes",
]
