import numpy as np
import pytest

from slabmc.mc.rng import UniformStream, spawn_streams


def test_stream_matches_generator_sequence():
    # 分块取数不改变序列（跨越块边界）
    stream = UniformStream(123, block=5)
    gen = np.random.default_rng(123)
    assert [stream.random() for _ in range(17)] == [gen.random() for _ in range(17)]


def test_stream_values_are_python_floats_in_unit_interval():
    stream = UniformStream(0)
    us = [stream.random() for _ in range(1000)]
    assert all(type(u) is float for u in us)
    assert all(0.0 <= u < 1.0 for u in us)


def test_stream_wraps_existing_generator():
    gen = np.random.default_rng(4)
    stream = UniformStream(generator=gen)
    assert stream.generator is gen


def test_stream_rejects_bad_block():
    with pytest.raises(ValueError):
        UniformStream(0, block=0)


def test_spawn_streams_reproducible_and_distinct():
    a = [s.random() for s in spawn_streams(7, 4)]
    b = [s.random() for s in spawn_streams(7, 4)]
    assert a == b
    assert len(set(a)) == 4


def test_spawn_streams_accepts_seed_sequence():
    ss = np.random.SeedSequence(7)
    a = [s.random() for s in spawn_streams(ss, 2)]
    b = [s.random() for s in spawn_streams(7, 2)]
    assert a == b


def test_spawn_streams_rejects_non_positive_count():
    with pytest.raises(ValueError):
        spawn_streams(0, 0)
