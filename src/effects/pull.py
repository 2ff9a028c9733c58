"""
pull エフェクト（放射状の引き寄せ変位場）

- 格子点をフォーカス点へ引き寄せる。引力は距離の逆三乗で減衰し、
  変位量 `d * k` はおおよそ `K / d**2` になる。
- 引力係数が 1 以上になる近傍（スナップ半径 `K ** (1/3)` 以内）の点は
  フォーカス点そのものに潰れる。

主なパラメータ:
- strength: 引力定数 K（既定 10000）。0 で恒等写像。
- epsilon: p == focus での 0 除算回避用の微小量（既定 1e-6）。

実装メモ:
- 入力格子は読むだけで書き換えない純関数。`out` を渡すと結果をそのバッファへ書き、
  呼び出し側がフレーム毎の確保を避けられる（`BitmapMesh` がこの経路を使う）。
- 各点の出力は (格子点, focus) のみに依存するため、点ごとのループ順に意味はない。
- Numba カーネルと NumPy ベクトル化カーネルは同じ式。`MW_USE_NUMBA=0` で後者を使う。
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
from numba import njit  # type: ignore[attr-defined]

from common import settings
from common.types import PointsLike
from engine.core.mesh_grid import as_points

from .registry import effect


@njit(cache=True)
def _pull_numba(
    src: np.ndarray,
    cx: float,
    cy: float,
    strength: float,
    eps: float,
    dst: np.ndarray,
) -> None:
    n = src.shape[0]
    for i in range(n):
        x = np.float64(src[i, 0])
        y = np.float64(src[i, 1])
        dx = cx - x
        dy = cy - y
        dd = dx * dx + dy * dy
        d = np.sqrt(dd)
        k = strength / (dd + eps)
        k /= d + eps
        if k >= 1.0:
            dst[i, 0] = cx
            dst[i, 1] = cy
        else:
            dst[i, 0] = x + dx * k
            dst[i, 1] = y + dy * k


def _pull_numpy(
    src: np.ndarray,
    cx: float,
    cy: float,
    strength: float,
    eps: float,
    dst: np.ndarray,
) -> None:
    x = src[:, 0].astype(np.float64)
    y = src[:, 1].astype(np.float64)
    dx = cx - x
    dy = cy - y
    dd = dx * dx + dy * dy
    d = np.sqrt(dd)
    k = strength / (dd + eps)
    k /= d + eps
    snap = k >= 1.0
    dst[:, 0] = np.where(snap, cx, x + dx * k)
    dst[:, 1] = np.where(snap, cy, y + dy * k)


def _resolve_focus(focus: Sequence[float]) -> tuple[float, float]:
    vals = tuple(float(v) for v in focus)
    if len(vals) != 2:
        raise ValueError(f"focus は (x, y) の 2 要素である必要があります: got {focus!r}")
    return vals[0], vals[1]


@effect()
def pull(
    grid: PointsLike,
    focus: Sequence[float],
    *,
    strength: float | None = None,
    epsilon: float | None = None,
    out: np.ndarray | None = None,
) -> np.ndarray:
    """格子点をフォーカス点へ引き寄せた新しい点列を返す。

    Parameters
    ----------
    grid : array-like
        `(N, 2)` の点列、または `(2N,)` の xy 交互配列。書き換えない。
    focus : tuple[float, float]
        引き寄せ中心（grid と同じ座標系）。格子範囲外でもよい。
    strength : float | None, default None
        引力定数 K。None なら `settings.PULL_STRENGTH`。
    epsilon : float | None, default None
        0 除算回避の微小量。None なら `settings.PULL_EPSILON`。
    out : np.ndarray | None, default None
        結果の書き込み先（`(N, 2)` float32, 書き込み可, grid とメモリ非共有）。

    Returns
    -------
    np.ndarray
        `(N, 2)` float32。`out` 指定時は `out` 自身。

    Raises
    ------
    ValueError
        grid/focus/out の形状が不正な場合。
    """
    src = as_points(grid)
    cx, cy = _resolve_focus(focus)
    cfg = settings.get()
    k = float(cfg.PULL_STRENGTH if strength is None else strength)
    eps = float(cfg.PULL_EPSILON if epsilon is None else epsilon)

    if out is None:
        dst = np.empty_like(src, dtype=np.float32)
    else:
        if out.shape != src.shape or out.dtype != np.float32:
            raise ValueError(
                f"out は形状 {src.shape} の float32 配列である必要があります: "
                f"got {out.shape} {out.dtype}"
            )
        if not out.flags.writeable:
            raise ValueError("out は書き込み可能である必要があります")
        if np.shares_memory(out, src):
            raise ValueError("out は grid とメモリを共有してはいけません")
        dst = out

    if src.shape[0] == 0:
        return dst

    if cfg.USE_NUMBA:
        _pull_numba(src, cx, cy, k, eps, dst)
    else:
        _pull_numpy(src, cx, cy, k, eps, dst)
    return dst


def snap_radius(strength: float | None = None) -> float:
    """点がフォーカスに潰れる距離（`k >= 1` となる境界, epsilon は無視）。"""
    k = float(settings.get().PULL_STRENGTH if strength is None else strength)
    return max(k, 0.0) ** (1.0 / 3.0)


__all__ = ["pull", "snap_radius"]
