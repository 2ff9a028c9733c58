"""
どこで: `common.env`
何を: `MW_*` 環境変数を型付きで読むための小さなパーサ群。
なぜ: 設定層（`common.settings`）で既定値/下限/不正値の扱いを揃えるため。
"""

from __future__ import annotations

import math
import os
from typing import Optional


def env_int(
    name: str, default: Optional[int] = None, *, min_value: Optional[int] = None
) -> Optional[int]:
    """整数環境変数を取得する。

    Parameters
    ----------
    name : str
        環境変数名。
    default : Optional[int]
        未設定または解釈できない場合に返す値。
    min_value : Optional[int]
        下限。指定時は読み取った値を下限に丸める。

    Returns
    -------
    Optional[int]
        読み取った整数、または `default`。
    """
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        val = int(raw.strip())
    except ValueError:
        return default
    if min_value is not None and val < min_value:
        val = min_value
    return val


def env_float(name: str, default: float, *, min_value: Optional[float] = None) -> float:
    """浮動小数環境変数を取得する（非有限値は既定値扱い）。"""
    raw = os.getenv(name)
    if raw is None:
        return float(default)
    try:
        val = float(raw.strip())
    except ValueError:
        return float(default)
    if not math.isfinite(val):
        return float(default)
    if min_value is not None and val < min_value:
        val = float(min_value)
    return val


def env_bool(name: str, default: bool = False) -> bool:
    """真偽環境変数を取得（0/1, true/false, on/off を許容）。"""
    raw = os.getenv(name)
    if raw is None:
        return bool(default)
    s = raw.strip().lower()
    try:
        return int(s) != 0
    except ValueError:
        pass
    if s in {"true", "t", "yes", "y", "on"}:
        return True
    if s in {"false", "f", "no", "n", "off"}:
        return False
    return bool(default)


__all__ = ["env_int", "env_float", "env_bool"]
