"""
どこで: `engine.core` の 2D アフィン行列。
何を: 画面座標 ⇄ メッシュ座標の変換（平行移動/拡大縮小/合成/逆行列/点写像）。
なぜ: ポインタ入力を逆行列でメッシュ空間へ戻し、フォーカス点として渡すため。

規約:
- 3x3 同次座標行列（float64）。点は列ベクトル `M @ [x, y, 1]`。
- `pre_*` は `M' = M @ T`（新しい変換を点に先に適用）。
- `post_*` は `M' = T @ M`（既存の変換の後に適用）。
- `set_*` は行列を置き換える。変更系メソッドは self を返すのでチェーン可能。
"""

from __future__ import annotations

import numpy as np

from common.types import PointsLike

from .mesh_grid import as_points

_SINGULAR_TOL = 1e-12


def _translation(tx: float, ty: float) -> np.ndarray:
    m = np.eye(3, dtype=np.float64)
    m[0, 2] = float(tx)
    m[1, 2] = float(ty)
    return m


def _scaling(sx: float, sy: float) -> np.ndarray:
    m = np.eye(3, dtype=np.float64)
    m[0, 0] = float(sx)
    m[1, 1] = float(sy)
    return m


class Matrix2D:
    """2D アフィン変換行列。"""

    __slots__ = ("_m",)

    def __init__(self, values: np.ndarray | None = None) -> None:
        if values is None:
            self._m = np.eye(3, dtype=np.float64)
            return
        m = np.array(values, dtype=np.float64)
        if m.shape != (3, 3):
            raise ValueError(f"Matrix2D は 3x3 である必要があります: got {m.shape}")
        self._m = m

    # ── ファクトリ ───────────────────
    @classmethod
    def translation(cls, tx: float, ty: float) -> "Matrix2D":
        return cls(_translation(tx, ty))

    @classmethod
    def scaling(cls, sx: float, sy: float | None = None) -> "Matrix2D":
        return cls(_scaling(sx, sx if sy is None else sy))

    # ── 変更系 ───────────────────────
    def reset(self) -> "Matrix2D":
        self._m = np.eye(3, dtype=np.float64)
        return self

    def set_translate(self, tx: float, ty: float) -> "Matrix2D":
        self._m = _translation(tx, ty)
        return self

    def set_scale(self, sx: float, sy: float | None = None) -> "Matrix2D":
        self._m = _scaling(sx, sx if sy is None else sy)
        return self

    def pre_translate(self, tx: float, ty: float) -> "Matrix2D":
        self._m = self._m @ _translation(tx, ty)
        return self

    def pre_scale(self, sx: float, sy: float | None = None) -> "Matrix2D":
        self._m = self._m @ _scaling(sx, sx if sy is None else sy)
        return self

    def post_translate(self, tx: float, ty: float) -> "Matrix2D":
        self._m = _translation(tx, ty) @ self._m
        return self

    def concat(self, other: "Matrix2D") -> "Matrix2D":
        """`M' = M @ other`（other を点に先に適用）。"""
        self._m = self._m @ other._m
        return self

    # ── 参照系 ───────────────────────
    @property
    def values(self) -> np.ndarray:
        """行列のコピー。"""
        return self._m.copy()

    def is_identity(self) -> bool:
        return bool(np.array_equal(self._m, np.eye(3)))

    def inverted(self) -> "Matrix2D":
        """逆行列を新しいインスタンスで返す。

        Raises
        ------
        ValueError
            特異（拡大率 0 など）で逆行列が存在しない場合。
        """
        (a, b, tx), (c, d, ty) = self._m[0], self._m[1]
        det = a * d - b * c
        if abs(det) < _SINGULAR_TOL:
            raise ValueError("特異行列のため逆行列を計算できません")
        # アフィン部分だけを解析的に反転（平行移動のみなら丸め誤差なし）
        ia, ib = d / det, -b / det
        ic, id_ = -c / det, a / det
        inv = np.array(
            [
                [ia, ib, -(ia * tx + ib * ty)],
                [ic, id_, -(ic * tx + id_ * ty)],
                [0.0, 0.0, 1.0],
            ],
            dtype=np.float64,
        )
        return Matrix2D(inv)

    def map_point(self, x: float, y: float) -> tuple[float, float]:
        m = self._m
        px = m[0, 0] * x + m[0, 1] * y + m[0, 2]
        py = m[1, 0] * x + m[1, 1] * y + m[1, 2]
        return float(px), float(py)

    def map_points(self, points: PointsLike) -> np.ndarray:
        """点列を写像した新しい `(N, 2)` float32 配列を返す（入力は変更しない）。"""
        pts = as_points(points).astype(np.float64)
        out = pts @ self._m[:2, :2].T + self._m[:2, 2]
        return out.astype(np.float32)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Matrix2D) and bool(np.allclose(self._m, other._m))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows = ", ".join(
            "[" + ", ".join(f"{v:g}" for v in row) + "]" for row in self._m.tolist()
        )
        return f"Matrix2D([{rows}])"


__all__ = ["Matrix2D"]
