"""
どこで: `engine.core` のメッシュ格子モジュール。
何を: テクスチャメッシュ用の基準格子・テクスチャ座標・三角形インデックスを生成する。
なぜ: ワープ場（effects）とメッシュ所有者（BitmapMesh）が同じ格子表現を共有するため。

データモデル（不変条件）:
- 格子は `float32 ndarray (N, 2)`、N = (cols + 1) * (rows + 1)。
- 行優先（y が外側、x が内側）。列 i・行 j の点は `(width * i / cols, height * j / rows)`。
- `build_grid` の戻り値は読み取り専用（`flags.writeable == False`）。

直感図（cols=2, rows=1）:

    idx:  0 ---- 1 ---- 2        y = 0
          |  \\   |  \\   |
          3 ---- 4 ---- 5        y = height

    mesh_indices -> [0, 1, 3,  1, 4, 3,  1, 2, 4,  2, 5, 4]
"""

from __future__ import annotations

import math
from numbers import Integral

import numpy as np

from common.types import PointsLike


def vertex_count(cols: int, rows: int) -> int:
    """格子の頂点数 `(cols + 1) * (rows + 1)`。"""
    c, r = _check_divisions(cols, rows)
    return (c + 1) * (r + 1)


def _check_divisions(cols: int, rows: int) -> tuple[int, int]:
    for label, v in (("cols", cols), ("rows", rows)):
        if isinstance(v, bool) or not isinstance(v, Integral):
            raise ValueError(f"{label} は整数である必要があります: got {v!r}")
        if v < 1:
            raise ValueError(f"{label} は 1 以上である必要があります: got {v}")
    return int(cols), int(rows)


def build_grid(width: float, height: float, cols: int, rows: int) -> np.ndarray:
    """幅 x 高さの矩形を cols x rows に分割した基準格子を返す。

    Parameters
    ----------
    width, height : float
        矩形の寸法（ビットマップのピクセル寸法など）。有限値であること。
    cols, rows : int
        横/縦の分割数（1 以上）。頂点は各方向に分割数 + 1 個。

    Returns
    -------
    np.ndarray
        `(N, 2)` float32 の読み取り専用配列。

    Raises
    ------
    ValueError
        分割数が 1 未満/非整数、または寸法が非有限の場合。
    """
    c, r = _check_divisions(cols, rows)
    w = float(width)
    h = float(height)
    if not (math.isfinite(w) and math.isfinite(h)):
        raise ValueError(f"width/height は有限値である必要があります: got {width!r}, {height!r}")

    # w * i / cols の順で計算（linspace の端点誤差を避ける）
    xs = w * np.arange(c + 1, dtype=np.float64) / c
    ys = h * np.arange(r + 1, dtype=np.float64) / r
    gx, gy = np.meshgrid(xs, ys)  # (rows+1, cols+1)

    grid = np.empty(((c + 1) * (r + 1), 2), dtype=np.float32)
    grid[:, 0] = gx.ravel()
    grid[:, 1] = gy.ravel()
    grid.setflags(write=False)
    return grid


def texture_coords(cols: int, rows: int) -> np.ndarray:
    """[0, 1] 正規化 (u, v) のテクスチャ座標（格子と同じ並び）。"""
    return build_grid(1.0, 1.0, cols, rows)


def mesh_indices(cols: int, rows: int) -> np.ndarray:
    """セルごとに 2 枚の三角形を並べたインデックス列（uint32, 長さ cols*rows*6）。

    セルの左上 a・右上 b・左下 c・右下 d に対し `(a, b, c), (b, d, c)`。
    """
    c, r = _check_divisions(cols, rows)
    stride = c + 1
    jj, ii = np.meshgrid(np.arange(r), np.arange(c), indexing="ij")
    a = (jj * stride + ii).ravel()
    b = a + 1
    lower = a + stride
    d = lower + 1
    tris = np.stack([a, b, lower, b, d, lower], axis=1)
    return tris.ravel().astype(np.uint32)


def as_points(points: PointsLike) -> np.ndarray:
    """点列入力を `(N, 2)` float32 の C 連続配列へ正規化する。

    - `(N, 2)` はそのまま（dtype/連続性のみ整える。可能ならコピーしない）。
    - `(2N,)` の xy 交互配列は `(N, 2)` に整形。
    - 空入力は `(0, 2)`。

    Raises
    ------
    ValueError
        上記いずれにも当てはまらない形状。
    """
    arr = np.asarray(points, dtype=np.float32)
    if arr.size == 0:
        return np.empty((0, 2), dtype=np.float32)
    if arr.ndim == 1:
        if arr.size % 2 != 0:
            raise ValueError("1 次元入力の長さは 2 の倍数である必要があります（x, y の並び）")
        arr = arr.reshape(-1, 2)
    elif arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError(f"点列の形状が不正です: {arr.shape}")
    if not arr.flags.c_contiguous:
        arr = np.ascontiguousarray(arr)
    return arr


__all__ = ["build_grid", "texture_coords", "mesh_indices", "vertex_count", "as_points"]
