"""
チュートリアル 01: タッチでメッシュを引き寄せる（ヘッドレス）

どこで: リポジトリ直下の実行スクリプト。
何を: `configs/default.yaml` から `BitmapMesh` を作り、ドラッグ軌跡を `on_touch` へ流して
      再描画回数と最大変位をログへ出す。
なぜ: レンダラ無しで「タッチ → 逆ビュー変換 → ワープ → 再描画判定」の流れを確認するため。

実行:
    python tutorials/01_touch_warp.py
    MW_LOG_LEVEL=DEBUG python tutorials/01_touch_warp.py   # ワープ毎のログも表示
"""

import logging

import numpy as np

from api import BitmapMesh, load_config
from common.logging import setup_default_logging

# 元デモのビットマップ寸法
BITMAP_SIZE = (1050.0, 788.0)


def drag_trace(steps: int = 40) -> list[tuple[float, float]]:
    """左上から右下へ斜めに動くドラッグ軌跡（画面座標）。"""
    w, h = BITMAP_SIZE
    ts = np.linspace(0.0, 1.0, steps)
    return [(float(10.0 + w * t), float(10.0 + h * t)) for t in ts]


def run(trace=None, config=None):
    """軌跡を流して `(mesh, 再描画回数)` を返す。"""
    cfg = load_config() if config is None else config
    mesh = BitmapMesh.from_config(*BITMAP_SIZE, cfg)
    redraws = sum(1 for x, y in (trace if trace is not None else drag_trace()) if mesh.on_touch(x, y))
    return mesh, redraws


def main():
    setup_default_logging()
    logger = logging.getLogger(__name__)
    logger.info("=== チュートリアル 01: タッチワープ ===")

    mesh, redraws = run()
    shift = np.linalg.norm(mesh.vertices - mesh.grid, axis=1)
    logger.info("%r", mesh)
    logger.info("redraws=%d, focus=%s, max shift=%.2f", redraws, mesh.focus, float(shift.max()))


if __name__ == "__main__":
    main()
