"""
どこで: `common.settings`
何を: ワープ場とメッシュの既定値を環境変数から読み込み、型付きで一元管理する。
なぜ: 引力定数 K などの調整値をコードに散らさず、テストから差し替え可能にするため。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_float, env_int

DEFAULT_PULL_STRENGTH = 10000.0
DEFAULT_PULL_EPSILON = 1e-6
DEFAULT_MESH_DIVISIONS = 20


@dataclass
class _Settings:
    # Warp field
    PULL_STRENGTH: float = DEFAULT_PULL_STRENGTH
    PULL_EPSILON: float = DEFAULT_PULL_EPSILON
    USE_NUMBA: bool = True

    # Mesh
    MESH_COLS: int = DEFAULT_MESH_DIVISIONS
    MESH_ROWS: int = DEFAULT_MESH_DIVISIONS


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - 引力定数は負値を 0 に丸める（0 は恒等ワープ）。
    - epsilon は 0 以下だと p == focus で 0 除算になるため既定値へ戻す。
    - 分割数は 1 未満を 1 に丸める。
    """
    _settings.PULL_STRENGTH = env_float(
        "MW_PULL_STRENGTH", DEFAULT_PULL_STRENGTH, min_value=0.0
    )
    eps = env_float("MW_PULL_EPSILON", DEFAULT_PULL_EPSILON)
    _settings.PULL_EPSILON = eps if eps > 0.0 else DEFAULT_PULL_EPSILON
    _settings.USE_NUMBA = env_bool("MW_USE_NUMBA", True)

    _settings.MESH_COLS = (
        env_int("MW_MESH_COLS", DEFAULT_MESH_DIVISIONS, min_value=1) or DEFAULT_MESH_DIVISIONS
    )
    _settings.MESH_ROWS = (
        env_int("MW_MESH_ROWS", DEFAULT_MESH_DIVISIONS, min_value=1) or DEFAULT_MESH_DIVISIONS
    )


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = [
    "get",
    "reload_from_env",
    "_Settings",
    "DEFAULT_PULL_STRENGTH",
    "DEFAULT_PULL_EPSILON",
    "DEFAULT_MESH_DIVISIONS",
]
