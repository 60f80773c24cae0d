# pylint: disable=missing-module-docstring,redefined-outer-name
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import hashlib
import io
import logging

import colorlog
import pytest

import rsadigest
from rsadigest import __main__ as cli
from rsadigest import digest

standard_payload = "The quick brown fox jumps over the lazy dog1234567890!@#$%^&*()-_=+[{}];:\\|<>,./?~`'\"".encode()


@pytest.fixture(autouse=True)
def quiet_logging(mocker):
    return mocker.patch("rsadigest.__main__.setup_logging")


@pytest.fixture
def keyfiles(tmp_path):
    pub, priv, full = tmp_path / "key.pub", tmp_path / "key.priv", tmp_path / "key.full"
    cli.main(["-n", "keygen", "--keysize", "64", "-p", str(pub), "-P", str(priv), "-f", str(full)])
    return pub, priv, full


def test_keygen_writes_keys(keyfiles):
    pub, priv, full = keyfiles
    fullkey = rsadigest.RSAFullKey.import_key(full)
    assert fullkey.size == 64
    assert rsadigest.RSAPubKey.import_key(pub) == fullkey.to_public()
    assert rsadigest.RSAPrivKey.import_key(priv) == fullkey.to_private()


def test_keygen_refuses_overwrite(keyfiles, capsys):
    pub, priv, _ = keyfiles
    before = pub.read_bytes()
    capsys.readouterr()
    cli.main(["-n", "keygen", "--keysize", "64", "-p", str(pub), "-P", str(priv)])
    assert "already exists" in capsys.readouterr().out
    assert pub.read_bytes() == before


def test_keygen_overwrites_when_asked(keyfiles):
    pub, priv, _ = keyfiles
    before = pub.read_bytes()
    cli.main(["-n", "keygen", "--keysize", "32", "-p", str(pub), "-P", str(priv), "-o"])
    assert pub.read_bytes() != before
    assert rsadigest.RSAPubKey.import_key(pub).size == 32


def test_keygen_interactive(tmp_path, mocker, capsys):
    pub, priv = tmp_path / "key.pub", tmp_path / "key.priv"
    mocker.patch("builtins.input", side_effect=[str(pub), str(priv), "nope", "32"])
    cli.main(["keygen"])
    out = capsys.readouterr().out
    assert "We could not convert your value to int." in out
    assert "=== KEY FACTORS ===" in out
    assert rsadigest.RSAPrivKey.import_key(priv).size == 32


def test_keygen_default_attempts(tmp_path, mocker, capsys):
    spy = mocker.spy(rsadigest.RSAFullKey, "generate")
    mocker.patch("builtins.input", side_effect=[str(tmp_path / "key.pub"), str(tmp_path / "key.priv"), "32"])
    cli.main(["keygen"])
    assert "max_attempts" not in capsys.readouterr().out
    assert spy.call_args.kwargs["max_attempts"] == cli.help_dict["max_attempts"].default


def test_keygen_advanced_asks_attempts(tmp_path, mocker, capsys):
    spy = mocker.spy(rsadigest.RSAFullKey, "generate")
    mocker.patch("builtins.input", side_effect=[str(tmp_path / "key.pub"), str(tmp_path / "key.priv"), "32", "50"])
    cli.main(["-a", "keygen"])
    assert "Please specify the max_attempts!" in capsys.readouterr().out
    assert spy.call_args.kwargs["max_attempts"] == 50


def test_keygen_validates_attempts(tmp_path):
    with pytest.raises(rsadigest.InvalidArgumentError):
        cli.main([
            "-n", "keygen", "--keysize", "32", "--max_attempts", "0", "-p",
            str(tmp_path / "key.pub"), "-P",
            str(tmp_path / "key.priv")
        ])


@pytest.mark.parametrize("direction", ["private-first", "public-first"])
def test_encrypt_decrypt(keyfiles, tmp_path, direction):
    pub, priv, _ = keyfiles
    enc_key, dec_key = (priv, pub) if direction == "private-first" else (pub, priv)
    clear, cipher, back = tmp_path / "clear.bin", tmp_path / "cipher.txt", tmp_path / "back.bin"
    clear.write_bytes(standard_payload + bytes(range(256)))
    cli.main(["-n", "encrypt", "-k", str(enc_key), "-i", str(clear), "-O", str(cipher)])
    lines = cipher.read_text(encoding="ascii").splitlines()
    assert len(lines) == len(standard_payload) + 256
    cli.main(["-n", "decrypt", "-k", str(dec_key), "-i", str(cipher), "-O", str(back)])
    assert back.read_bytes() == clear.read_bytes()


def test_decrypt_truncates_damaged_file(keyfiles, tmp_path):
    pub, priv, _ = keyfiles
    clear, cipher, back = tmp_path / "clear.bin", tmp_path / "cipher.txt", tmp_path / "back.bin"
    clear.write_bytes(b"Hello")
    cli.main(["-n", "encrypt", "-k", str(priv), "-i", str(clear), "-O", str(cipher)])
    lines = cipher.read_text(encoding="ascii").splitlines()
    cipher.write_bytes(("\n".join(lines[:2] + ["\xe9t\xe9"] + lines[2:]) + "\n").encode("latin-1"))
    cli.main(["-n", "decrypt", "-k", str(pub), "-i", str(cipher), "-O", str(back)])
    assert back.read_bytes() == b"He"


def test_encrypt_rejects_full_key(keyfiles, tmp_path):
    _, _, full = keyfiles
    clear = tmp_path / "clear.bin"
    clear.write_bytes(b"Hello")
    with pytest.raises(IOError):
        cli.main(["-n", "encrypt", "-k", str(full), "-i", str(clear), "-O", str(tmp_path / "cipher.txt")])


@pytest.mark.parametrize("kind", [0, 1, 2])
def test_dump(keyfiles, capsys, kind):
    capsys.readouterr()
    cli.main(["-n", "dump", "-k", str(keyfiles[kind])])
    out = capsys.readouterr().out
    assert out.startswith("=== KEY FACTORS ===\nn: 0x")
    assert out.endswith("=== END ===\n")


def test_digest(tmp_path, capsys):
    target = tmp_path / "payload.bin"
    target.write_bytes(standard_payload)
    cli.main(["-n", "digest", "-i", str(target)])
    assert capsys.readouterr().out.strip() == hashlib.sha512(standard_payload).hexdigest()


@pytest.mark.parametrize("chunk_size", [1, 7, 64, digest.CHUNK_SIZE])
def test_sha512_digest(chunk_size):
    payload = standard_payload * 50
    assert digest.sha512_digest(io.BytesIO(payload), chunk_size) == hashlib.sha512(payload).digest()


def test_non_interactive_missing_argument(tmp_path):
    with pytest.raises(IOError, match="non-interactive"):
        cli.main(["-n", "encrypt", "-i", str(tmp_path / "clear.bin")])


def test_setup_logging_colors(mocker):
    mocker.stopall()
    basic = mocker.patch("logging.basicConfig")
    capture = mocker.patch("logging.captureWarnings")
    cli.setup_logging(verbose=True)
    (handler,) = basic.call_args.kwargs["handlers"]
    assert isinstance(handler.formatter, colorlog.ColoredFormatter)
    assert basic.call_args.kwargs["level"] == logging.INFO
    capture.assert_called_once_with(True)
