"""共通フィクスチャ。

- 乱数シード固定
- 小さな格子試料
- 環境変数で設定を差し替えるヘルパ（終了時に既定へ戻す）
"""

from __future__ import annotations

from typing import Callable, Iterator

import numpy as np
import pytest

from common import settings
from engine.core.mesh_grid import build_grid


@pytest.fixture(scope="session", autouse=True)
def np_seed() -> None:
    """NumPy の乱数を固定。"""
    np.random.seed(12345)


@pytest.fixture()
def grid_2x2() -> np.ndarray:
    """[(0,0), (10,0), (0,10), (10,10)] の 1x1 セル格子。"""
    return build_grid(10.0, 10.0, 1, 1)


@pytest.fixture()
def grid_20() -> np.ndarray:
    return build_grid(1050.0, 788.0, 20, 20)


@pytest.fixture()
def set_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[Callable[..., None]]:
    """`set_env(MW_X="1", ...)` で環境変数を設定して settings を再読込する。"""

    def _apply(**values: str) -> None:
        for k, v in values.items():
            monkeypatch.setenv(k, v)
        settings.reload_from_env()

    yield _apply
    monkeypatch.undo()
    settings.reload_from_env()


@pytest.fixture(params=["numba", "numpy"])
def kernel(request: pytest.FixtureRequest, set_env: Callable[..., None]) -> str:
    """pull のカーネルを切り替えて両経路を検証する。"""
    set_env(MW_USE_NUMBA="1" if request.param == "numba" else "0")
    return request.param
