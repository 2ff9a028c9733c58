"""
どこで: `common` のパラメータ正規化ユーティリティ。
何を: 構成値（スカラー/1要素/2要素）を `(x, y)` タプルへ揃える。
"""

from __future__ import annotations

from typing import Any, Iterable


def ensure_vec2(v: float | Iterable[float]) -> tuple[float, float]:
    """スカラーは両成分へ複製、1要素は複製、2要素はそのまま。"""
    if isinstance(v, (int, float)):
        f = float(v)
        return (f, f)
    t = tuple(float(x) for x in v)
    if len(t) == 1:
        return (t[0], t[0])
    if len(t) != 2:
        raise ValueError("vec2 には数値の単体、1要素タプル、または2要素タプルを指定してください")
    return (t[0], t[1])


def vec2_or_default(v: Any, default: tuple[float, float]) -> tuple[float, float]:
    """None なら default、それ以外は `ensure_vec2`。"""
    if v is None:
        return (float(default[0]), float(default[1]))
    return ensure_vec2(v)


__all__ = ["ensure_vec2", "vec2_or_default"]
