"""
どこで: `effects` パッケージ（関数ベース）。
何を: 格子 → 格子のワープ場を登録し、`api` / `BitmapMesh` から名前で利用可能にする。
"""

# ワープ場を登録
from . import pull  # noqa: F401
from .registry import effect, get_effect, list_effects

__all__ = [
    "effect",
    "get_effect",
    "list_effects",
]
