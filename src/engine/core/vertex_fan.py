"""
どこで: `engine.core` の頂点ファン。
何を: 中心 + 四隅の 5 頂点による TRIANGLE_FAN テクスチャ表示で、中心頂点をタッチ位置へ動かす。
なぜ: 格子を使わない最小構成の頂点ワープ（テクスチャ座標は固定、頂点だけ動かす）を提供するため。

頂点の並び:
    0 = 中心 (w/2, h/2), 1 = 左上, 2 = 右上, 3 = 右下, 4 = 左下
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

import numpy as np

from common.param_utils import vec2_or_default
from util.utils import config_section

from .matrix2d import Matrix2D

logger = logging.getLogger(__name__)

# 1 番目の頂点で閉じるファン（インデックス指定描画用）
FAN_INDICES: tuple[int, ...] = (0, 1, 2, 3, 4, 1)
DEFAULT_SCALE: tuple[float, float] = (0.8, 0.8)
DEFAULT_OFFSET: tuple[float, float] = (20.0, 20.0)


def fan_to_triangles(indices: Sequence[int]) -> np.ndarray:
    """TRIANGLE_FAN のインデックス列を三角形リスト `(n-2, 3)` に展開する。

    3 未満なら空配列 `(0, 3)`。
    """
    idx = np.asarray(indices, dtype=np.uint32).ravel()
    n = idx.shape[0]
    if n < 3:
        return np.empty((0, 3), dtype=np.uint32)
    tris = np.empty((n - 2, 3), dtype=np.uint32)
    tris[:, 0] = idx[0]
    tris[:, 1] = idx[1:-1]
    tris[:, 2] = idx[2:]
    return tris


def _fan_points(w: float, h: float) -> np.ndarray:
    return np.array(
        [[w / 2, h / 2], [0.0, 0.0], [w, 0.0], [w, h], [0.0, h]],
        dtype=np.float32,
    )


class VertexFan:
    """中心頂点だけが動くテクスチャ付き三角形ファン。"""

    def __init__(self, width: float, height: float, *, matrix: Matrix2D | None = None) -> None:
        self.width = float(width)
        self.height = float(height)
        self._texs = _fan_points(self.width, self.height)
        self._texs.setflags(write=False)
        self._verts = _fan_points(self.width, self.height)
        if matrix is None:
            matrix = Matrix2D.scaling(*DEFAULT_SCALE).pre_translate(*DEFAULT_OFFSET)
        self._matrix = matrix
        self._inverse = matrix.inverted()

    @classmethod
    def from_config(
        cls,
        width: float,
        height: float,
        config: Mapping[str, Any] | None = None,
    ) -> "VertexFan":
        """構成の `vertex_fan` セクション（`scale`, `translate`）から生成する。"""
        sec = config_section(dict(config) if config is not None else None, "vertex_fan")
        sx, sy = vec2_or_default(sec.get("scale"), DEFAULT_SCALE)
        tx, ty = vec2_or_default(sec.get("translate"), DEFAULT_OFFSET)
        return cls(width, height, matrix=Matrix2D.scaling(sx, sy).pre_translate(tx, ty))

    @property
    def vertices(self) -> np.ndarray:
        view = self._verts.view()
        view.setflags(write=False)
        return view

    @property
    def texture_coords(self) -> np.ndarray:
        return self._texs

    @property
    def matrix(self) -> Matrix2D:
        return self._matrix

    @property
    def center(self) -> tuple[float, float]:
        return float(self._verts[0, 0]), float(self._verts[0, 1])

    def set_center(self, x: float, y: float) -> None:
        """中心頂点をメッシュ座標 (x, y) へ移動する。"""
        self._verts[0, 0] = x
        self._verts[0, 1] = y

    def on_touch(self, x: float, y: float) -> bool:
        """画面座標のタッチを逆ビュー変換し、中心頂点をそこへ移す（常に再描画）。"""
        mx, my = self._inverse.map_point(x, y)
        self.set_center(mx, my)
        logger.debug("fan center -> (%.2f, %.2f)", mx, my)
        return True

    def reset(self) -> None:
        self._verts[:] = _fan_points(self.width, self.height)

    def triangles(self, *, indexed: bool = True) -> np.ndarray:
        """描画用の三角形リスト。

        indexed=True は `FAN_INDICES`（1 番で閉じる 4 枚）、False は頂点順そのまま（3 枚）。
        """
        if indexed:
            return fan_to_triangles(FAN_INDICES)
        return fan_to_triangles(range(self._verts.shape[0]))


__all__ = ["VertexFan", "fan_to_triangles", "FAN_INDICES"]
