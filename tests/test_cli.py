"""Tests for the command-line entry point."""

import io

import pytest

from head_extractor.cli import build_parser, main


def test_prints_heads_sorted(world, world_heads):
    out = io.StringIO()
    assert main([str(world), "--workers", "2"], out=out) == 0
    assert out.getvalue().splitlines() == sorted(world_heads)


def test_prints_to_stdout(world, world_heads, capsys):
    assert main([str(world), "-q"]) == 0
    assert set(capsys.readouterr().out.split()) == world_heads


def test_empty_world_prints_nothing(tmp_path):
    out = io.StringIO()
    assert main([str(tmp_path)], out=out) == 0
    assert out.getvalue() == ""


def test_missing_world(tmp_path, capsys):
    assert main([str(tmp_path / "nope")]) == 1
    assert "Please specify one world folder" in capsys.readouterr().err


def test_partial_failure_still_succeeds(world, world_heads):
    (world / "region" / "r.5.5.mca").write_bytes(b"\x00\x00\x02")
    out = io.StringIO()
    assert main([str(world)], out=out) == 0
    assert set(out.getvalue().splitlines()) == world_heads


@pytest.mark.parametrize("argv", [[], ["a", "b"], ["w", "--workers", "0"], ["w", "-v", "-q"]])
def test_usage_errors(argv):
    with pytest.raises(SystemExit) as info:
        main(argv)
    assert info.value.code == 2


def test_parser_defaults():
    args = build_parser().parse_args(["world"])
    assert args.world == "world"
    assert args.workers is None
    assert not args.verbose and not args.quiet
