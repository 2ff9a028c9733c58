import numpy as np
import pytest

hypothesis = pytest.importorskip("hypothesis", reason="hypothesis is a test optional dependency")
from hypothesis import given, settings as hsettings, strategies as st  # type: ignore

from effects.pull import pull
from engine.core.mesh_grid import build_grid

coord = st.floats(-2000.0, 2000.0, allow_nan=False, allow_infinity=False)


@hsettings(deadline=None, max_examples=60)
@given(
    fx=coord,
    fy=coord,
    strength=st.floats(0.0, 50000.0),
    cols=st.integers(1, 8),
    rows=st.integers(1, 8),
)
def test_warp_moves_points_toward_focus(fx, fy, strength, cols, rows):
    grid = build_grid(640.0, 480.0, cols, rows)
    out = pull(grid, (fx, fy), strength=strength)

    assert out.shape == grid.shape
    assert np.all(np.isfinite(out))

    focus = np.array([fx, fy], dtype=np.float64)
    d_in = np.linalg.norm(grid.astype(np.float64) - focus, axis=1)
    d_out = np.linalg.norm(out.astype(np.float64) - focus, axis=1)
    # 出力点は p と focus を結ぶ線分上（focus に近づくか留まる）
    assert np.all(d_out <= d_in + 1e-3)


@hsettings(deadline=None, max_examples=40)
@given(fx=coord, fy=coord)
def test_warp_is_pure(fx, fy):
    grid = build_grid(100.0, 100.0, 5, 5)
    before = grid.copy()
    a = pull(grid, (fx, fy))
    b = pull(grid, (fx, fy))
    np.testing.assert_array_equal(grid, before)
    np.testing.assert_array_equal(a, b)
