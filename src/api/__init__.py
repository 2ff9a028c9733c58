"""
どこで: `api` 入口（高レベル公開 API）。
何を: 格子生成・ワープ場・メッシュ所有者を単一名前空間から再輸出する。

Usage:
    from api import BitmapMesh, build_grid, pull

    grid = build_grid(1050, 788, 20, 20)
    warped = pull(grid, (300.0, 200.0))          # 新しい配列、grid は不変

    mesh = BitmapMesh(1050, 788)                  # 20x20, view = translate(10, 10)
    if mesh.on_touch(310.0, 210.0):
        texs, verts, cols, rows = mesh.draw_args()
"""

from common.logging import setup_default_logging
from effects.pull import pull, snap_radius
from effects.registry import effect, get_effect, list_effects
from engine.core.bitmap_mesh import BitmapMesh
from engine.core.matrix2d import Matrix2D
from engine.core.mesh_grid import build_grid, mesh_indices, texture_coords, vertex_count
from engine.core.vertex_fan import VertexFan, fan_to_triangles
from util.utils import load_config

__all__ = [
    # ワープ場
    "pull",
    "snap_radius",
    "effect",
    "get_effect",
    "list_effects",
    # 格子
    "build_grid",
    "texture_coords",
    "mesh_indices",
    "vertex_count",
    # メッシュ所有者
    "BitmapMesh",
    "VertexFan",
    "fan_to_triangles",
    "Matrix2D",
    # 構成/ロギング
    "load_config",
    "setup_default_logging",
]
