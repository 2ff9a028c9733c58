"""
どこで: `util.utils`
何を: YAML 構成ファイルの読み込み（フェイルソフト）。
なぜ: メッシュ分割数やビュー変換をコード外で調整できるようにするため。
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)


def _safe_load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("構成ファイルを読み込めませんでした: %s (%s)", path, e)
        return {}
    return data if isinstance(data, dict) else {}


def _find_project_root(start: Path) -> Path:
    """`pyproject.toml` か `configs/` を持つ最も近い上位ディレクトリを返す。

    見つからない場合は `<repo>/src/util/utils.py` を想定して 2 階層上を返す。
    """
    cur = start.resolve()
    for parent in [cur] + list(cur.parents):
        if (parent / "pyproject.toml").exists() or (parent / "configs").is_dir():
            return parent
    return cur.parent.parent


def load_config(root: Optional[Path] = None) -> Dict[str, Any]:
    """構成を読み込んで辞書で返す。

    優先順:
    1) `configs/default.yaml`（ベース）
    2) ルート `config.yaml`（トップレベルキー単位で上書き）

    - どちらも無い/不正な場合は空辞書。
    - `root` を省略するとこのファイル位置からプロジェクトルートを推定する。
    """
    project_root = root if root is not None else _find_project_root(Path(__file__).parent)
    base: Dict[str, Any] = {}

    default_path = project_root / "configs" / "default.yaml"
    if default_path.exists():
        base.update(_safe_load_yaml(default_path))

    root_config_path = project_root / "config.yaml"
    if root_config_path.exists():
        base.update(_safe_load_yaml(root_config_path))

    return base


def config_section(config: Optional[Dict[str, Any]], name: str) -> Dict[str, Any]:
    """`config[name]` を辞書として返す（無い/辞書でない場合は空辞書）。

    `config` が None なら `load_config()` を読む。
    """
    cfg = load_config() if config is None else config
    section = cfg.get(name)
    return section if isinstance(section, dict) else {}
