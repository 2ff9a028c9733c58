"""
meshwarp 用のロギング初期化ヘルパ。

- 各モジュールは `logging.getLogger(__name__)` でロガーを取得する。
- ホスト側（描画ループ/アプリ）が未設定の場合に限り、最小構成を 1 度だけ入れる。
- 呼び出し元はエントリスクリプト（`tutorials/*.py` の `main()` など）。ライブラリ内部からは呼ばない。
"""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_LEVEL_ENV = "MW_LOG_LEVEL"


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        level = os.getenv(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        lvl = logging.getLevelName(level.strip().upper())
        # 未知の名前は "Level X" 文字列が返る
        return lvl if isinstance(lvl, int) else logging.INFO
    return int(level)


def setup_default_logging(level: int | str | None = None) -> None:
    """ルートロガーにハンドラが無ければ `basicConfig` を適用する。

    - 既にハンドラがあれば何もしない（ホストの設定を尊重）
    - level は `"DEBUG"` 等の名前か数値。None なら `MW_LOG_LEVEL`（既定 INFO）
    """
    root = logging.getLogger()
    if root.handlers:
        return
    logging.basicConfig(level=_resolve_level(level), format=LOG_FORMAT)


__all__ = ["setup_default_logging", "LOG_FORMAT", "LOG_LEVEL_ENV"]
