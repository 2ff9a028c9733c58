from __future__ import annotations

import logging
from pathlib import Path

import pytest

from util.utils import _find_project_root, config_section, load_config


def test_find_project_root_fallback(tmp_path: Path) -> None:
    # 上流に pyproject.toml/configs が無い構造ではフォールバックで start.parent.parent
    start = tmp_path / "a" / "b"
    start.mkdir(parents=True)
    assert _find_project_root(start) == start.parent.parent


def test_repo_default_config_is_found() -> None:
    cfg = load_config()
    sec = config_section(cfg, "bitmap_mesh")
    assert sec["cols"] == 20
    assert sec["translate"] == [10.0, 10.0]
    assert config_section(cfg, "vertex_fan")["scale"] == [0.8, 0.8]


def test_root_config_overrides_top_level(tmp_path: Path) -> None:
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text(
        "bitmap_mesh:\n  cols: 20\n  rows: 20\nvertex_fan:\n  scale: 1\n", encoding="utf-8"
    )
    (tmp_path / "config.yaml").write_text("bitmap_mesh:\n  cols: 5\n", encoding="utf-8")
    cfg = load_config(root=tmp_path)
    # トップレベル単位の上書き（ネストはマージしない）
    assert cfg["bitmap_mesh"] == {"cols": 5}
    assert cfg["vertex_fan"] == {"scale": 1}


def test_malformed_yaml_is_fail_soft(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text("bitmap_mesh: [1, 2\n", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="util.utils"):
        assert load_config(root=tmp_path) == {}
    assert caplog.records


def test_config_section_non_dict() -> None:
    assert config_section({"bitmap_mesh": [1, 2]}, "bitmap_mesh") == {}
    assert config_section({}, "missing") == {}
