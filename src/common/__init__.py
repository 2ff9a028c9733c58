"""
どこで: `common` パッケージ。
何を: 設定・環境変数・ロギング・型エイリアスなど、各層で共有する軽量基盤。
"""

from .logging import setup_default_logging

__all__ = [
    "setup_default_logging",
]
