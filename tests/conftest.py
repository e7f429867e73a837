"""Pytest configuration and fixtures."""

import json
from pathlib import Path
from typing import Dict

import pytest

from userextract.config import PATTERN_ENV_VAR, RULE_FILE_ENV_VAR


@pytest.fixture
def sample_rule_document() -> Dict:
    """Deny admins, map the EXAMPLE.COM realm, then certificate subjects."""
    return {
        "rules": [
            {"pattern": r"admin@.*", "allow": False},
            {"pattern": r"(\w+)@EXAMPLE\.COM", "user": "$1"},
            {"pattern": r"CN=([^,]+),OU=(\w+),.*", "user": "$2-$1"},
        ]
    }


@pytest.fixture
def write_rule_file(tmp_path):
    """Write a rule document (dict or raw text) and return its path."""

    def _write(document, name="rules.json") -> Path:
        path = tmp_path / name
        if isinstance(document, str):
            path.write_text(document)
        else:
            path.write_text(json.dumps(document))
        return path

    return _write


@pytest.fixture
def sample_rule_file(write_rule_file, sample_rule_document) -> Path:
    return write_rule_file(sample_rule_document)


@pytest.fixture(autouse=True)
def clean_extraction_env(monkeypatch):
    """Keep the caller's environment out of configuration tests."""
    monkeypatch.delenv(PATTERN_ENV_VAR, raising=False)
    monkeypatch.delenv(RULE_FILE_ENV_VAR, raising=False)
