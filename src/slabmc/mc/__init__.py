from .kernels_cpu import (
    sample_hg_cos_theta, sample_phi, rotate_direction, scatter, check_unit,
    sample_free_path, distance_to_boundary, exit_bin,
)
from .rng import UniformStream, spawn_streams
from .tallies import SlabTally, TrackRecorder
from .photon_types import ExitRecord, FACE_NEAR, FACE_FAR
