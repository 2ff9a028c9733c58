"""
どこで: `effects` のレジストリ層（ワープ場関数専用）。
何を: `@effect` デコレータによる登録と取得/一覧を提供（キーは正規化）。
なぜ: メッシュ所有者（`BitmapMesh`）が名前でワープ場を差し替えられるようにするため。

ワープ場のシグネチャ:
    fn(grid: ndarray (N, 2), focus: Vec2, **params) -> ndarray (N, 2)
    `out` 引数を明示的に受け取る関数には、`BitmapMesh` が WarpedGrid バッファを渡す。
    受け取らない関数は戻り値が WarpedGrid へコピーされる。

補助 API:
- `unregister(name)`: 登録解除（テスト用途）。
- `get_registry()`: 読み取り専用ビュー（テスト/診断用）。
"""

from __future__ import annotations

import inspect
import re
from types import MappingProxyType
from typing import Any, Callable, Mapping

EffectFn = Callable[..., Any]

_registry: dict[str, EffectFn] = {}


def _normalize_key(name: str) -> str:
    """登録キーの正規化（"RadialPull" -> "radial_pull", "a-b" -> "a_b"）。"""
    if not isinstance(name, str):
        raise TypeError("レジストリキーは str である必要があります")
    if not name:
        raise ValueError("レジストリキーは空であってはなりません")
    name = name.replace("-", "_")
    if not any(c.isupper() for c in name):
        return name.lower()
    s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", name)
    return re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1).lower()


def _register(fn: Any, name: str | None) -> EffectFn:
    if not inspect.isfunction(fn):
        raise TypeError(f"@effect は関数のみ登録可能です: got {fn!r}")
    key = _normalize_key(name) if name else _normalize_key(fn.__name__)
    if key in _registry and _registry[key] is not fn:
        raise ValueError(f"'{key}' は既に登録されています")
    _registry[key] = fn
    return fn


def effect(arg: Any | None = None, /, name: str | None = None):
    """ワープ場関数を登録するデコレータ。

    使用例:
    - `@effect` / `@effect()`                        → 関数名から自動推論。
    - `@effect("custom")` / `@effect(name="custom")` → 明示名で登録。
    """
    if inspect.isfunction(arg) and name is None:
        return _register(arg, None)

    if isinstance(arg, str) and name is None:
        return lambda fn: _register(fn, arg)

    return lambda fn: _register(fn, name)


def get_effect(name: str) -> EffectFn:
    """登録されたワープ場関数を取得。

    例外:
    - KeyError: 未登録名の場合。
    """
    key = _normalize_key(name)
    if key not in _registry:
        raise KeyError(f"'{name}' は登録されていません")
    return _registry[key]


def list_effects() -> list[str]:
    """登録済みの名前をソートして返す。"""
    return sorted(_registry)


def unregister(name: str) -> None:
    """名前を指定して登録を解除（存在しない場合は無視）。"""
    _registry.pop(_normalize_key(name), None)


def get_registry() -> Mapping[str, EffectFn]:
    """読み取り専用ビューとしてレジストリ辞書を返す。"""
    return MappingProxyType(_registry)


__all__ = [
    "effect",
    "get_effect",
    "list_effects",
    "unregister",
    "get_registry",
]
