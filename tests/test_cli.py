"""
Tests for CLI functionality.

These tests verify the command-line interface logic.
"""

from __future__ import annotations

import argparse
import json
from datetime import date
from io import StringIO
from unittest.mock import patch

import pytest

from naturalist.cli import cmd_info, create_parser, main, options_from_args
from naturalist.client import Client
from naturalist.errors import TransportError
from tests.conftest import FakeExecutor
from tests.test_codec import SAMPLE_FULL_OBSERVATION, SAMPLE_SIMPLE_OBSERVATION


class TestCreateParser:
    """Tests for create_parser function."""

    def test_creates_parser(self) -> None:
        """Parser is created successfully."""
        parser = create_parser()
        assert isinstance(parser, argparse.ArgumentParser)
        assert parser.prog == "naturalist"

    def test_parser_has_version(self) -> None:
        """Parser has version argument."""
        parser = create_parser()
        with pytest.raises(SystemExit):
            parser.parse_args(["--version"])

    def test_parser_has_debug_flag(self) -> None:
        parser = create_parser()
        args = parser.parse_args(["--debug", "info"])
        assert args.debug is True

    def test_observations_defaults(self) -> None:
        """Unspecified filters stay None."""
        parser = create_parser()
        args = parser.parse_args(["observations"])
        assert args.page is None
        assert args.bbox is None
        assert args.order_ascending is None
        assert args.has_geo is False

    def test_asc_and_desc_are_exclusive(self) -> None:
        parser = create_parser()
        with pytest.raises(SystemExit):
            parser.parse_args(["observations", "--asc", "--desc"])

    def test_observation_command(self) -> None:
        parser = create_parser()
        args = parser.parse_args(["observation", "2741", "--full"])
        assert args.id == 2741
        assert args.full is True


class TestOptionsFromArgs:
    """Flags map onto list options; absent flags stay unset."""

    def test_no_flags(self) -> None:
        args = create_parser().parse_args(["observations"])
        assert options_from_args(args).model_fields_set == set()

    def test_all_flags(self) -> None:
        args = create_parser().parse_args(
            [
                "observations",
                "--page", "2",
                "--per-page", "50",
                "--bbox", "-10.5", "20.25", "-5", "25.75",
                "--on", "2016-03-02",
                "--order-by", "observed_on",
                "--asc",
                "--has-geo",
            ]
        )  # fmt: skip
        opt = options_from_args(args)
        assert opt.page == 2
        assert opt.per_page == 50
        assert opt.rectangle is not None
        assert opt.rectangle.southwest.longitude == -10.5
        assert opt.rectangle.northeast.latitude == 25.75
        assert opt.on == date(2016, 3, 2)
        assert opt.order_by == "observed_on"
        assert opt.order_ascending is True
        assert opt.has_geo is True


class TestCmdInfo:
    """Tests for cmd_info function."""

    def test_returns_zero(self) -> None:
        assert cmd_info(argparse.Namespace()) == 0

    def test_prints_app_info(self) -> None:
        with patch("sys.stdout", new=StringIO()) as mock_stdout:
            cmd_info(argparse.Namespace())
            output = mock_stdout.getvalue()
            assert "Application" in output
            assert "Base URL" in output


class TestMain:
    """End-to-end through main() with a scripted executor."""

    def _run(self, argv: list[str], executor: FakeExecutor, client: Client) -> tuple[int, str, str]:
        with (
            patch("naturalist.cli.Client", return_value=client),
            patch("sys.stdout", new=StringIO()) as out,
            patch("sys.stderr", new=StringIO()) as err,
        ):
            code = main(argv)
        return code, out.getvalue(), err.getvalue()

    def test_no_command_prints_help(self) -> None:
        with patch("sys.stdout", new=StringIO()) as out:
            assert main([]) == 0
        assert "usage" in out.getvalue()

    def test_observations(self, executor: FakeExecutor, client: Client) -> None:
        executor.queue([SAMPLE_SIMPLE_OBSERVATION], headers={"X-Total-Entries": "1"})
        code, out, _ = self._run(["observations", "--per-page", "1"], executor, client)
        assert code == 0
        data = json.loads(out)
        assert data["observations"][0]["id"] == 2741
        assert data["paging"]["total_entries"] == 1
        assert executor.calls[0].url.endswith("/observations.json?per_page=1")

    def test_observation_full(self, executor: FakeExecutor, client: Client) -> None:
        executor.queue(SAMPLE_FULL_OBSERVATION)
        code, out, _ = self._run(["observation", "2741", "--full"], executor, client)
        assert code == 0
        assert len(json.loads(out)["photos"]) == 2

    def test_observation_summary(self, executor: FakeExecutor, client: Client) -> None:
        executor.queue(SAMPLE_SIMPLE_OBSERVATION)
        code, out, _ = self._run(["observation", "2741"], executor, client)
        assert code == 0
        assert json.loads(out)["latitude"] == 37.5

    def test_user(self, executor: FakeExecutor, client: Client) -> None:
        executor.queue([])
        code, out, _ = self._run(["user", "kueda"], executor, client)
        assert code == 0
        assert executor.calls[0].url.endswith("/observations/kueda.json")
        assert json.loads(out)["observations"] == []

    def test_error_returns_one(self, executor: FakeExecutor, client: Client) -> None:
        executor.fail(TransportError("connection refused"))
        code, _, err = self._run(["user", "kueda"], executor, client)
        assert code == 1
        assert "connection refused" in err
