"""
Unit tests for the CLI entry point: start URL resolution, exit codes, flags.

The Actor and run_crawl are mocked; no storage is opened and no browser is
launched.
"""

from __future__ import annotations

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from scraper import main as cli
from scraper.main import start_url_from_input


def _stats(*, failed: int = 0) -> SimpleNamespace:
    return SimpleNamespace(
        requests_total=1,
        requests_finished=1 - failed,
        requests_failed=failed,
    )


def _actor(actor_input=None, *, input_error: BaseException | None = None) -> MagicMock:
    """Actor factory whose active instance returns actor_input from get_input."""
    instance = MagicMock()
    if input_error is not None:
        instance.get_input = AsyncMock(side_effect=input_error)
    else:
        instance.get_input = AsyncMock(return_value=actor_input)
    factory = MagicMock()
    factory.return_value.__aenter__ = AsyncMock(return_value=instance)
    factory.return_value.__aexit__ = AsyncMock(return_value=False)
    return factory


@pytest.fixture(autouse=True)
def storage_env(monkeypatch, tmp_path):
    monkeypatch.setenv("STORAGE_DIR", str(tmp_path))
    monkeypatch.setenv("LOG_STDOUT", "true")
    monkeypatch.delenv("LOG_FILE", raising=False)
    monkeypatch.delenv("HEADLESS", raising=False)
    monkeypatch.delenv("MAX_REQUEST_RETRIES", raising=False)
    monkeypatch.setattr(cli, "load_dotenv", lambda: None)
    return tmp_path


def test_main_uses_url_flag():
    actor = _actor({"startUrl": "https://example.com/p/other"})
    run = AsyncMock(return_value=_stats())
    with patch.object(cli, "Actor", new=actor), patch.object(cli, "run_crawl", new=run):
        code = cli.main(["--url", "https://example.com/p/123"])

    assert code == 0
    args, kwargs = run.await_args
    assert args[0] == "https://example.com/p/123"
    assert kwargs["crawler_config"].headless is True
    assert kwargs["inspect"] is False
    assert actor.call_args.kwargs["exit_process"] is False
    assert actor.call_args.kwargs["configure_logging"] is False


def test_main_opens_actor_on_storage_dir(storage_env):
    actor = _actor()
    run = AsyncMock(return_value=_stats())
    with patch.object(cli, "Actor", new=actor), patch.object(cli, "run_crawl", new=run):
        cli.main(["--url", "https://example.com/p/123"])

    configuration = actor.call_args.kwargs["configuration"]
    assert str(configuration.storage_dir) == str(storage_env)


def test_main_reads_start_url_from_input():
    actor = _actor({"startUrl": "https://example.com/p/9"})
    run = AsyncMock(return_value=_stats())
    with patch.object(cli, "Actor", new=actor), patch.object(cli, "run_crawl", new=run):
        assert cli.main([]) == 0

    assert run.await_args.args[0] == "https://example.com/p/9"


def test_main_without_start_url_exits_2():
    run = AsyncMock()
    with patch.object(cli, "Actor", new=_actor(None)), patch.object(cli, "run_crawl", new=run):
        assert cli.main([]) == 2
    run.assert_not_awaited()


def test_main_malformed_input_exits_2(capsys):
    error = json.JSONDecodeError("Expecting value", "{not json", 1)
    run = AsyncMock()
    with patch.object(cli, "Actor", new=_actor(input_error=error)), patch.object(
        cli, "run_crawl", new=run
    ):
        assert cli.main([]) == 2

    run.assert_not_awaited()
    assert "invalid INPUT.json" in capsys.readouterr().err


def test_main_non_object_input_exits_2():
    run = AsyncMock()
    with patch.object(cli, "Actor", new=_actor(["https://example.com/p/1"])), patch.object(
        cli, "run_crawl", new=run
    ):
        assert cli.main([]) == 2
    run.assert_not_awaited()


def test_main_failed_request_exits_1():
    run = AsyncMock(return_value=_stats(failed=1))
    with patch.object(cli, "Actor", new=_actor()), patch.object(cli, "run_crawl", new=run):
        assert cli.main(["--url", "https://example.com/p/1"]) == 1


def test_main_inspect_forces_headed():
    run = AsyncMock(return_value=_stats())
    with patch.object(cli, "Actor", new=_actor()), patch.object(cli, "run_crawl", new=run):
        cli.main(["--url", "https://example.com/p/1", "--inspect"])

    kwargs = run.await_args.kwargs
    assert kwargs["inspect"] is True
    assert kwargs["crawler_config"].headless is False


def test_main_invalid_config_exits_2(monkeypatch):
    monkeypatch.setenv("MAX_REQUEST_RETRIES", "-1")
    run = AsyncMock()
    with patch.object(cli, "Actor", new=_actor()), patch.object(cli, "run_crawl", new=run):
        assert cli.main(["--url", "https://example.com/p/1"]) == 2
    run.assert_not_awaited()


@pytest.mark.parametrize(
    "actor_input, expected",
    [
        ({"startUrl": "https://example.com/p/1"}, "https://example.com/p/1"),
        ({"url": "https://example.com/p/2"}, "https://example.com/p/2"),
        ({"startUrl": "  "}, None),
        ({}, None),
        (None, None),
    ],
)
def test_start_url_from_input(actor_input, expected):
    assert start_url_from_input(actor_input) == expected


@pytest.mark.parametrize("actor_input", ["https://example.com/p/1", {"startUrl": 5}])
def test_start_url_from_input_rejects_bad_shapes(actor_input):
    with pytest.raises(ValueError):
        start_url_from_input(actor_input)
