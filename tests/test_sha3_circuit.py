"""Tests for the sha3_circuit command-line script."""

import hashlib
import sys

import pytest

from constraints import ConstraintSystemConfig
from gadgets import digest_bytes
import sha3_circuit


def test_synthesize_with_public_digest() -> None:
    cs, digest = sha3_circuit.synthesize(b"abc", 3, True, ConstraintSystemConfig())
    assert digest_bytes(digest) == hashlib.sha3_256(b"abc").digest()
    assert cs.num_inputs == 256
    assert cs.is_satisfied()


def test_synthesize_without_witness() -> None:
    cs, digest = sha3_circuit.synthesize(None, 3, True, ConstraintSystemConfig())
    assert digest_bytes(digest) is None
    assert cs.num_inputs == 256


def test_main_reports_match(monkeypatch, capsys) -> None:
    monkeypatch.setattr(sys, "argv", ["sha3_circuit.py", "--hex", "616263"])
    sha3_circuit.main()
    out = capsys.readouterr().out
    assert "3a985da74fe225b2045c172d6bd390bd855f086e3e9d525b46bfe24511431532" in out
    assert "matches hashlib" in out


def test_main_rejects_bad_hex(monkeypatch) -> None:
    monkeypatch.setattr(sys, "argv", ["sha3_circuit.py", "--hex", "zz"])
    with pytest.raises(SystemExit) as exc:
        sha3_circuit.main()
    assert exc.value.code == 2


def test_main_reports_variable_limit(monkeypatch) -> None:
    monkeypatch.setattr(sys, "argv", ["sha3_circuit.py", "abc", "--max-variables", "100"])
    with pytest.raises(SystemExit) as exc:
        sha3_circuit.main()
    assert exc.value.code == 1
