"""
どこで: `engine.core` サブパッケージ。
何を: メッシュ格子・2D アフィン行列・メッシュ所有者（BitmapMesh / VertexFan）を提供。
なぜ: ワープ計算と描画ループの境界をここに集約し、レンダラはブラックボックスとして扱うため。
"""
