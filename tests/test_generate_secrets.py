"""Tests for the secret generation script."""

from __future__ import annotations

import importlib.util
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]


def _load_script():
    spec = importlib.util.spec_from_file_location("generate_secrets", ROOT / "scripts" / "generate_secrets.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_generates_two_distinct_secrets():
    module = _load_script()
    secrets = module.generate_secrets(32)
    assert set(secrets) == {"ACCESS_TOKEN_SECRET", "REFRESH_TOKEN_SECRET"}
    assert secrets["ACCESS_TOKEN_SECRET"] != secrets["REFRESH_TOKEN_SECRET"]
    assert len(secrets["ACCESS_TOKEN_SECRET"]) == 64


def test_main_prints_env_lines(capsys):
    module = _load_script()
    assert module.main(["--bytes", "48"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert [line.split("=", 1)[0] for line in lines] == ["ACCESS_TOKEN_SECRET", "REFRESH_TOKEN_SECRET"]


def test_main_refuses_short_secrets():
    module = _load_script()
    assert module.main(["--bytes", "8"]) == 1
