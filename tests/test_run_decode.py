import io
import sys

import run_decode


def test_cli_prints_summary(sample_path, capsys):
    code = run_decode.main([sample_path])
    out = capsys.readouterr().out

    assert code == 0
    assert "amount: 123.0" in out
    assert "delivery groups: 1" in out
    assert "[0] Sr, GJ, IN 123123" in out
    assert "email: helo@gmail.com" in out


def test_cli_reports_failures(sample_path, tmp_path, capsys):
    bad = tmp_path / "bad.json"
    bad.write_bytes(b'{"cart": {}}')

    code = run_decode.main([sample_path, str(bad), str(tmp_path / "missing.json"), "--quiet"])
    captured = capsys.readouterr()

    assert code == 1
    assert captured.out == ""
    assert "bad.json: missing_field: missing field `cost` at $.cart" in captured.err


def test_cli_reads_stdin(monkeypatch, capsys):
    stdin = io.TextIOWrapper(io.BytesIO(b'{"cart": {"cost": '))
    monkeypatch.setattr(sys, "stdin", stdin)

    code = run_decode.main([])

    assert code == 1
    assert "-: eof:" in capsys.readouterr().err
