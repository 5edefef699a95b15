from __future__ import annotations

from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]


def test_namespace_discovery_finds_every_src_package() -> None:
    setuptools = pytest.importorskip("setuptools")
    found = set(setuptools.find_namespace_packages(where=str(ROOT), include=["src*"]))
    assert {
        "src",
        "src.api",
        "src.application.services",
        "src.cli",
        "src.db",
        "src.domain.value_objects",
        "src.repositories.sqlite",
    } <= found
    assert "namespaces = true" in (ROOT / "pyproject.toml").read_text(encoding="utf-8")
