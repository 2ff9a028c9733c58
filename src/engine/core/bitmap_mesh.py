"""
どこで: `engine.core` のメッシュ所有者。
何を: 基準格子（不変）とワープ済み格子（再利用バッファ）を保持し、タッチ入力でワープを更新する。
なぜ: 描画ループ側はレンダラへ `(texture_coords, vertices, cols, rows)` を渡すだけにし、
      ワープ計算の呼び出し頻度（タッチ毎・整数座標が変わった時のみ）をここへ閉じ込めるため。

ライフサイクル:
- 生成時に `grid`（読み取り専用）と `vertices`（grid のコピー）を作る。
- `on_touch` / `warp` のたびに `vertices` を全点上書きする（部分更新はしない）。
- `reset` で `vertices` を `grid` に戻す。
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Mapping

import numpy as np

from common import settings
from common.param_utils import vec2_or_default
from effects.registry import get_effect
from util.utils import config_section

from .matrix2d import Matrix2D
from .mesh_grid import build_grid, mesh_indices, texture_coords

logger = logging.getLogger(__name__)

# 有効なタッチ座標と一致しない初期値
_NO_WARP: tuple[int, int] = (-9999, 0)
DEFAULT_VIEW_OFFSET: tuple[float, float] = (10.0, 10.0)


class BitmapMesh:
    """タッチ位置へ格子を引き寄せるテクスチャメッシュ。

    Parameters
    ----------
    width, height : float
        テクスチャ（ビットマップ）の寸法。
    cols, rows : int | None
        分割数。None なら `settings.MESH_COLS/MESH_ROWS`。
    matrix : Matrix2D | None
        描画時のビュー変換。None なら (10, 10) の平行移動。
    field : str
        ワープ場のレジストリ名（既定 "pull"）。
    **field_params
        ワープ場へ渡す追加引数（`strength`, `epsilon` など）。
    """

    def __init__(
        self,
        width: float,
        height: float,
        cols: int | None = None,
        rows: int | None = None,
        *,
        matrix: Matrix2D | None = None,
        field: str = "pull",
        **field_params: Any,
    ) -> None:
        cfg = settings.get()
        self.width = float(width)
        self.height = float(height)
        self.cols = int(cfg.MESH_COLS if cols is None else cols)
        self.rows = int(cfg.MESH_ROWS if rows is None else rows)

        self._grid = build_grid(self.width, self.height, self.cols, self.rows)
        self._verts = self._grid.copy()
        self._texs = texture_coords(self.cols, self.rows)
        self._indices = mesh_indices(self.cols, self.rows)

        self._matrix = matrix if matrix is not None else Matrix2D.translation(*DEFAULT_VIEW_OFFSET)
        self._inverse = self._matrix.inverted()

        self._field_name = field
        self._field = get_effect(field)
        self._field_params = dict(field_params)
        # `out=` を受け取るワープ場にだけ WarpedGrid を直接書かせる
        self._field_takes_out = "out" in inspect.signature(self._field).parameters

        self._last_warp: tuple[int, int] = _NO_WARP
        self._focus: tuple[float, float] | None = None
        logger.debug(
            "BitmapMesh created: %gx%g, %dx%d cells, %d vertices, field=%s",
            self.width,
            self.height,
            self.cols,
            self.rows,
            self._grid.shape[0],
            field,
        )

    @classmethod
    def from_config(
        cls,
        width: float,
        height: float,
        config: Mapping[str, Any] | None = None,
    ) -> "BitmapMesh":
        """構成の `bitmap_mesh` セクションから生成する。

        認識するキー: `cols`, `rows`, `translate`, `field`, `strength`, `epsilon`。
        """
        sec = config_section(dict(config) if config is not None else None, "bitmap_mesh")
        tx, ty = vec2_or_default(sec.get("translate"), DEFAULT_VIEW_OFFSET)
        params: dict[str, Any] = {}
        for key in ("strength", "epsilon"):
            if sec.get(key) is not None:
                params[key] = float(sec[key])
        cols = sec.get("cols")
        rows = sec.get("rows")
        return cls(
            width,
            height,
            None if cols is None else int(cols),
            None if rows is None else int(rows),
            matrix=Matrix2D.translation(tx, ty),
            field=str(sec.get("field", "pull")),
            **params,
        )

    # ── 参照 ─────────────────────────
    @property
    def grid(self) -> np.ndarray:
        """基準格子（読み取り専用）。"""
        return self._grid

    @property
    def vertices(self) -> np.ndarray:
        """ワープ済み格子の読み取り専用ビュー。次の warp で内容が変わる。"""
        view = self._verts.view()
        view.setflags(write=False)
        return view

    @property
    def texture_coords(self) -> np.ndarray:
        return self._texs

    @property
    def indices(self) -> np.ndarray:
        return self._indices

    @property
    def matrix(self) -> Matrix2D:
        return self._matrix

    @property
    def focus(self) -> tuple[float, float] | None:
        """最後にワープした中心（メッシュ座標）。未ワープなら None。"""
        return self._focus

    @property
    def vertex_count(self) -> int:
        return int(self._grid.shape[0])

    # ── 更新 ─────────────────────────
    def warp(self, x: float, y: float) -> np.ndarray:
        """メッシュ座標 (x, y) を中心にワープ済み格子を再計算する。

        ワープ場が `out` を受け取るならバッファへ直接書かせ、そうでなければ戻り値を
        WarpedGrid へコピーする。
        """
        params = dict(self._field_params)
        if self._field_takes_out:
            params["out"] = self._verts
        result = self._field(self._grid, (x, y), **params)
        if result is not self._verts:
            np.copyto(self._verts, np.asarray(result).reshape(self._verts.shape))
        self._focus = (float(x), float(y))
        return self.vertices

    def on_touch(self, x: float, y: float) -> bool:
        """画面座標のタッチを処理し、再描画が必要なら True を返す。

        逆ビュー変換でメッシュ座標へ戻し、整数に切り捨てた位置が前回と同じなら何もしない。
        ワープ自体は切り捨て前の座標で行う。
        """
        mx, my = self._inverse.map_point(x, y)
        key = (int(mx), int(my))
        if key == self._last_warp:
            return False
        self._last_warp = key
        self.warp(mx, my)
        logger.debug("warp at (%.2f, %.2f)", mx, my)
        return True

    def reset(self) -> None:
        """ワープを解除し、ワープ済み格子を基準格子へ戻す。"""
        np.copyto(self._verts, self._grid)
        self._last_warp = _NO_WARP
        self._focus = None

    def draw_args(self) -> tuple[np.ndarray, np.ndarray, int, int]:
        """メッシュレンダラへ渡す `(texture_coords, vertices, cols, rows)`。"""
        return self._texs, self.vertices, self.cols, self.rows

    def __repr__(self) -> str:
        return (
            f"BitmapMesh({self.width:g}x{self.height:g}, cols={self.cols}, rows={self.rows}, "
            f"field={self._field_name!r})"
        )


__all__ = ["BitmapMesh", "DEFAULT_VIEW_OFFSET"]
