from __future__ import annotations

import numpy as np
import pytest

from effects.pull import pull, snap_radius
from effects.registry import get_effect
from engine.core.mesh_grid import build_grid


def test_length_and_dtype_preserved(kernel: str, grid_20: np.ndarray) -> None:
    out = pull(grid_20, (300.0, 200.0))
    assert out.shape == grid_20.shape
    assert out.dtype == np.float32


def test_input_grid_not_mutated(kernel: str) -> None:
    grid = np.array([[0, 0], [10, 0], [0, 10], [10, 10]], dtype=np.float32)
    before = grid.copy()
    out = pull(grid, (3.0, 4.0), strength=10.0)
    np.testing.assert_array_equal(grid, before)
    assert not np.shares_memory(out, grid)


def test_point_at_focus_snaps_exactly(kernel: str, grid_2x2: np.ndarray) -> None:
    out = pull(grid_2x2, (10.0, 10.0), strength=10.0)
    assert np.all(np.isfinite(out))
    assert out[3, 0] == 10.0 and out[3, 1] == 10.0


def test_concrete_2x2_scenario(kernel: str, grid_2x2: np.ndarray) -> None:
    """focus=(0,0): 原点はそのまま、隣接点は原点寄り、対角点はわずかに動く。"""
    out = pull(grid_2x2, (0.0, 0.0), strength=10.0)

    assert out[0, 0] == 0.0 and out[0, 1] == 0.0
    # k = 10 / 100 / 10 = 0.01 -> 10 - 10 * 0.01
    np.testing.assert_allclose(out[1], [9.9, 0.0], rtol=1e-5, atol=1e-6)
    np.testing.assert_allclose(out[2], [0.0, 9.9], rtol=1e-5, atol=1e-6)

    moved = np.linalg.norm(out - grid_2x2, axis=1)
    assert moved[3] < moved[1]
    np.testing.assert_allclose(out[3], [10.0, 10.0], atol=0.05)
    assert out[3, 0] < 10.0 and out[3, 1] < 10.0


def test_default_strength_snaps_small_grid(kernel: str, grid_2x2: np.ndarray) -> None:
    # 既定 K=10000 のスナップ半径は約 21.5 なので 10x10 格子は全点が focus に潰れる
    out = pull(grid_2x2, (0.0, 0.0))
    np.testing.assert_array_equal(out, np.zeros((4, 2), dtype=np.float32))


def test_far_focus_leaves_grid_in_place(kernel: str, grid_2x2: np.ndarray) -> None:
    out = pull(grid_2x2, (1e6, 1e6))
    np.testing.assert_allclose(out, grid_2x2, atol=1e-4)


def test_repeated_calls_are_identical(kernel: str, grid_20: np.ndarray) -> None:
    a = pull(grid_20, (512.3, 101.7))
    b = pull(grid_20, (512.3, 101.7))
    np.testing.assert_array_equal(a, b)


def test_displacement_decays_with_distance(kernel: str) -> None:
    # focus から x 方向に並ぶ点（すべてスナップ半径の外側）
    xs = np.linspace(25.0, 500.0, 40, dtype=np.float32)
    grid = np.stack([xs, np.zeros_like(xs)], axis=1)
    out = pull(grid, (0.0, 0.0))
    moved = np.linalg.norm(out - grid, axis=1)
    assert np.all(np.diff(moved) <= 0.0)
    assert moved[-1] < 0.05


def test_farther_point_never_moves_more_outside_snap_radius(
    kernel: str, grid_20: np.ndarray
) -> None:
    focus = np.array([400.0, 300.0])
    out = pull(grid_20, tuple(focus))
    dist = np.linalg.norm(grid_20 - focus, axis=1)
    moved = np.linalg.norm(out - grid_20, axis=1)

    outside = dist > snap_radius() + 1.0
    order = np.argsort(dist[outside])
    m = moved[outside][order]
    assert np.all(np.diff(m) <= 1e-3)

    inside = ~outside
    np.testing.assert_allclose(out[inside], np.broadcast_to(focus, out[inside].shape), atol=1e-4)


def test_kernels_agree(set_env, grid_20: np.ndarray) -> None:
    set_env(MW_USE_NUMBA="1")
    a = pull(grid_20, (250.5, 390.25))
    set_env(MW_USE_NUMBA="0")
    b = pull(grid_20, (250.5, 390.25))
    np.testing.assert_allclose(a, b, rtol=1e-6, atol=1e-4)


def test_zero_strength_is_identity(kernel: str, grid_20: np.ndarray) -> None:
    out = pull(grid_20, (100.0, 100.0), strength=0.0)
    np.testing.assert_array_equal(out, grid_20)


def test_out_buffer_is_reused(kernel: str, grid_20: np.ndarray) -> None:
    buf = np.empty_like(grid_20)
    res = pull(grid_20, (10.0, 10.0), out=buf)
    assert res is buf
    np.testing.assert_array_equal(buf, pull(grid_20, (10.0, 10.0)))


def test_out_buffer_validation(grid_20: np.ndarray) -> None:
    with pytest.raises(ValueError):
        pull(grid_20, (0.0, 0.0), out=np.empty((3, 2), dtype=np.float32))
    with pytest.raises(ValueError):
        pull(grid_20, (0.0, 0.0), out=np.empty(grid_20.shape, dtype=np.float64))

    ro = np.empty_like(grid_20)
    ro.setflags(write=False)
    with pytest.raises(ValueError):
        pull(grid_20, (0.0, 0.0), out=ro)

    writable = grid_20.copy()
    with pytest.raises(ValueError):
        pull(writable, (0.0, 0.0), out=writable)


def test_flat_xy_input_accepted(kernel: str, grid_2x2: np.ndarray) -> None:
    flat = [0.0, 0.0, 10.0, 0.0, 0.0, 10.0, 10.0, 10.0]
    out = pull(flat, (0.0, 0.0), strength=10.0)
    np.testing.assert_array_equal(out, pull(grid_2x2, (0.0, 0.0), strength=10.0))


def test_bad_shapes_raise() -> None:
    with pytest.raises(ValueError):
        pull(np.zeros((4, 3), dtype=np.float32), (0.0, 0.0))
    with pytest.raises(ValueError):
        pull([1.0, 2.0, 3.0], (0.0, 0.0))
    with pytest.raises(ValueError):
        pull(np.zeros((4, 2), dtype=np.float32), (0.0, 0.0, 0.0))


def test_empty_grid(kernel: str) -> None:
    out = pull(np.empty((0, 2), dtype=np.float32), (1.0, 1.0))
    assert out.shape == (0, 2)


def test_focus_outside_grid_bounds(kernel: str) -> None:
    grid = build_grid(100.0, 100.0, 4, 4)
    out = pull(grid, (-50.0, 150.0), strength=1000.0)
    assert np.all(np.isfinite(out))
    # 全点 focus 側（-x, +y）へ寄るか、そのまま
    assert np.all(out[:, 0] <= grid[:, 0] + 1e-5)
    assert np.all(out[:, 1] >= grid[:, 1] - 1e-5)


def test_settings_strength_is_default(set_env, grid_2x2: np.ndarray) -> None:
    set_env(MW_PULL_STRENGTH="10")
    np.testing.assert_allclose(pull(grid_2x2, (0.0, 0.0))[1], [9.9, 0.0], rtol=1e-5)


def test_snap_radius() -> None:
    assert snap_radius(1000.0) == pytest.approx(10.0)
    assert snap_radius(10000.0) == pytest.approx(21.5443469)
    assert snap_radius(-5.0) == 0.0


def test_registered_under_pull() -> None:
    assert get_effect("pull") is pull
    assert get_effect("Pull") is pull
