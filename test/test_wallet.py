#!/usr/bin/env python3
"""Tests for wallet keypair loading."""

import json

import base58
import pytest
from solders.keypair import Keypair

from root_relayer.errors import WalletError
from root_relayer.wallet import load_wallet


def test_load_wallet_from_json_array(tmp_path) -> None:
    keypair = Keypair()
    source = tmp_path / "id.json"
    source.write_text(json.dumps(list(bytes(keypair))), encoding="utf-8")

    loaded = load_wallet(str(source))
    assert bytes(loaded) == bytes(keypair)
    assert loaded.pubkey() == keypair.pubkey()


def test_load_wallet_from_b58(tmp_path) -> None:
    keypair = Keypair()
    source = tmp_path / "id.b58"
    source.write_text(base58.b58encode(bytes(keypair)).decode("utf-8") + "\n", encoding="utf-8")

    loaded = load_wallet(str(source))
    assert bytes(loaded) == bytes(keypair)


def test_load_wallet_expands_home(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    keypair = Keypair()
    (tmp_path / "id.json").write_text(json.dumps(list(bytes(keypair))), encoding="utf-8")
    monkeypatch.setenv("HOME", str(tmp_path))

    loaded = load_wallet("~/id.json")
    assert loaded.pubkey() == keypair.pubkey()


def test_load_wallet_missing_file(tmp_path) -> None:
    with pytest.raises(WalletError, match="Failed to read wallet file"):
        load_wallet(str(tmp_path / "absent.json"))


def test_load_wallet_wrong_length(tmp_path) -> None:
    source = tmp_path / "short.json"
    source.write_text(json.dumps([1] * 32), encoding="utf-8")

    with pytest.raises(WalletError, match="expected 64 bytes, got 32"):
        load_wallet(str(source))


@pytest.mark.parametrize(
    "content",
    [
        "[1, 2, 3",                 # truncated JSON
        json.dumps(["a"] * 64),     # not integers
        json.dumps([300] * 64),     # out of byte range
        "0OIl-not-base58",
    ],
)
def test_load_wallet_malformed(tmp_path, content: str) -> None:
    source = tmp_path / "bad.json"
    source.write_text(content, encoding="utf-8")

    with pytest.raises(WalletError, match="Malformed wallet file"):
        load_wallet(str(source))


def test_load_wallet_binary_file(tmp_path) -> None:
    """A raw binary keypair is not a supported format."""
    source = tmp_path / "id.bin"
    source.write_bytes(bytes(range(256)))

    with pytest.raises(WalletError, match="Malformed wallet file"):
        load_wallet(str(source))
