"""Tests for the command-line driver."""

from factory_planner.config import POWER_RANGE
from main import build_parser, main


class TestParser:
    """Tests for build_parser."""

    def test_power_range_default(self):
        args = build_parser().parse_args(["demo"])
        assert args.power_range == POWER_RANGE

    def test_power_range_override(self):
        args = build_parser().parse_args(["demo", "-r", "5"])
        assert args.power_range == 5

    def test_route_blocks(self):
        args = build_parser().parse_args(["route", "0,0,E", "4,0,W", "-b", "2,0", "-b", "2,1"])
        assert args.block == ["2,0", "2,1"]


class TestCommands:
    """Tests for the main entry point."""

    def test_catalog(self, capsys):
        assert main(["catalog"]) == 0
        out = capsys.readouterr().out
        assert "miner-mk1" in out
        assert "make-circuit-board" in out

    def test_demo(self, capsys):
        assert main(["demo"]) == 0
        out = capsys.readouterr().out
        assert "LAYOUT" in out
        assert "Machines powered: 3/4" in out

    def test_route(self, capsys):
        assert main(["route", "0,0,E", "4,0,W", "-b", "2,0"]) == 0
        out = capsys.readouterr().out
        assert "(0.5,0)" in out
        assert "(3.5,0)" in out

    def test_route_blocked(self, capsys):
        code = main(["route", "5,5,E", "10,5,W",
                     "-b", "7,5", "-b", "6,4", "-b", "6,6", "-b", "5,5"])
        assert code == 1
        assert "No clear route" in capsys.readouterr().out

    def test_bad_port_spec(self, capsys):
        assert main(["route", "0,0", "4,0,W"]) == 1
        assert "Invalid port spec" in capsys.readouterr().out
