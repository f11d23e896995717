import pytest

from sphfluid.app import SimulationState, screen_to_simulation
from sphfluid.particle_system import ParticleSystem


def _state(count=10, seed=1):
    return SimulationState(ParticleSystem(count, 2.0, 1.125, seed=seed))


def _positions(state):
    return [p.position for p in state.system.particles]


def _flat_positions(state):
    return [float(c) for p in _positions(state) for c in p]


def test_bottom_left_corner_maps_to_origin():
    assert screen_to_simulation(0, 720, 1280, 720) == pytest.approx((0.0, 0.0))


def test_top_right_corner_maps_to_container_extent():
    assert screen_to_simulation(1280, 0, 1280, 720) == pytest.approx((2.0, 1.125))


def test_screen_y_points_down_simulation_y_points_up():
    _, upper = screen_to_simulation(100, 100, 1280, 720)
    _, lower = screen_to_simulation(100, 500, 1280, 720)
    assert upper > lower


def test_horizontal_mapping_is_linear():
    left, _ = screen_to_simulation(320, 0, 1280, 720)
    right, _ = screen_to_simulation(960, 0, 1280, 720)
    middle, _ = screen_to_simulation(640, 0, 1280, 720)
    assert middle == pytest.approx((left + right) / 2)


def test_space_toggles_pause():
    state = _state()
    assert state.paused is False
    assert state.handle_key("space") is True
    assert state.paused is True
    state.handle_key("space")
    assert state.paused is False


def test_paused_step_leaves_particles_alone():
    state = _state()
    state.handle_key("space")
    before = _positions(state)
    assert state.step(0.016, (0.0, 0.0), False) is False
    assert _positions(state) == before


def test_running_step_moves_particles():
    state = _state()
    before = _positions(state)
    assert state.step(0.016, (0.0, 0.0), False) is True
    assert _positions(state) != before


def test_step_caps_large_time_step():
    capped = _state(seed=7)
    exact = _state(seed=7)
    capped.step(1.0, (0.0, 0.0), False)
    exact.step(0.016, (0.0, 0.0), False)
    expected = _flat_positions(exact)
    actual = _flat_positions(capped)
    assert len(actual) == len(expected)
    assert actual == pytest.approx(expected)


def test_g_toggles_backend():
    state = _state()
    assert state.use_cpu is True
    state.handle_key("g")
    assert state.use_cpu is False
    state.handle_key("G")
    assert state.use_cpu is True


def test_equal_adds_a_batch_of_particles():
    state = _state()
    before = len(state.system)
    state.handle_key("=")
    assert len(state.system) == before + 100


def test_minus_removes_particles_but_not_below_zero():
    state = _state()
    state.handle_key("-")
    assert len(state.system) == 0
    state.handle_key("-")
    assert len(state.system) == 0


def test_r_restores_initial_particle_count():
    state = _state()
    before = len(state.system)
    state.handle_key("-")
    state.handle_key("r")
    assert len(state.system) == before


def test_unbound_key_is_ignored():
    state = _state()
    before = _positions(state)
    assert state.handle_key("q") is False
    assert state.paused is False
    assert state.use_cpu is True
    assert _positions(state) == before