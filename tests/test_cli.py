from __future__ import annotations

import pytest

from cda.cli import build_parser
from cda.commands import address, apply_schema, parse, scrape
from cda.commands.apply_schema import SCHEMA_PATH, _split_statements


def test_parse_command_defaults():
    args = build_parser().parse_args(["parse", "notice.pdf"])
    assert args.func is parse.run
    assert args.out == "json"
    assert args.url is None
    assert not args.verbose


def test_scrape_command_options():
    args = build_parser().parse_args(["-v", "scrape", "--year", "2019", "--all", "--seed", "3", "--out", "both"])
    assert args.func is scrape.run
    assert (args.year, args.all, args.seed, args.out) == (2019, True, 3, "both")
    assert args.verbose


def test_address_and_schema_commands():
    parser = build_parser()
    assert parser.parse_args(["address", "1 Main ST", "2 Main ST"]).text == ["1 Main ST", "2 Main ST"]
    assert parser.parse_args(["apply-schema"]).func is apply_schema.run
    assert parser.parse_args(["address", "x"]).func is address.run


def test_command_is_required():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_address_command_prints_canonical_form(capsys):
    args = build_parser().parse_args(["address", "4,665 Princes HWY MENINGIE 5264", "LOT: 5 DP 1234"])
    args.func(args)
    out = capsys.readouterr().out
    assert "4665 PRINCES HIGHWAY, MENINGIE SA 5264" in out
    assert "(no address)" in out


def test_schema_statements():
    stmts = _split_statements(SCHEMA_PATH.read_text(encoding="utf-8"))
    assert len(stmts) == 2
    assert stmts[0].startswith("CREATE TABLE IF NOT EXISTS application")
    assert all(not s.startswith("--") for s in stmts)


def test_split_statements_drops_comments():
    sql = "-- header\nCREATE TABLE a (x TEXT);\n  -- note\nCREATE INDEX b ON a (x);\n\n"
    assert _split_statements(sql) == ["CREATE TABLE a (x TEXT)", "CREATE INDEX b ON a (x)"]


def test_reference_dir_from_environment(monkeypatch, tmp_path):
    from cda._config import load_settings

    monkeypatch.setenv("CDA_REFERENCE_DIR", str(tmp_path))
    assert load_settings(env_file=tmp_path / ".env").reference_dir == tmp_path
