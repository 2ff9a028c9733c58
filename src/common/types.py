"""
どこで: `common` の型定義。
何を: 点/点列のエイリアス。
"""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np

Vec2 = tuple[float, float]
PointsLike = Union[np.ndarray, Sequence[Vec2], Sequence[float]]

__all__ = ["Vec2", "PointsLike"]
