"""
CLI Component Tests

Command dispatch in catalog_app.cli.run with a mocked client.
"""
import argparse
from pathlib import Path

import pytest

from catalog_app import cli
from catalog_app.console import ConsoleUI
from core.config import CatalogClientConfig

pytestmark = [pytest.mark.component, pytest.mark.asyncio]


class _ClientContext:
    """Async context manager yielding a shared mock client"""

    def __init__(self, client):
        self.client = client

    async def __aenter__(self):
        return self.client

    async def __aexit__(self, *exc):
        return False


@pytest.fixture
def patched_client(monkeypatch, mock_client):
    monkeypatch.setattr(cli, "CatalogServiceClient", lambda *args, **kwargs: _ClientContext(mock_client))
    return mock_client


@pytest.fixture
def config(tmp_path) -> CatalogClientConfig:
    return CatalogClientConfig(api_base_url="http://catalog.test", storage_path=str(tmp_path / "storage.json"))


@pytest.fixture
def output():
    return []


@pytest.fixture
def console(output) -> ConsoleUI:
    return ConsoleUI(input_func=lambda _: "", output_func=output.append)


def parse(*argv) -> argparse.Namespace:
    return cli.build_parser().parse_args(list(argv))


class TestCliCommands:

    async def test_list_renders_albums(self, patched_client, config, console, output):
        code = await cli.run(parse("list"), config, console)

        assert code == 0
        assert output[-1] == "3 results"
        assert "Master of Puppets" in output[0]

    async def test_list_with_filter_searches(self, patched_client, config, console, output):
        code = await cli.run(parse("list", "--band", "ac/dc"), config, console)

        assert code == 0
        assert patched_client.calls_to("list_albums")[-1]["params"] == {"band": "ac/dc"}
        assert output[-1] == "1 results"

    async def test_list_failure_exits_nonzero(self, patched_client, config, console, output):
        patched_client.fail("list_albums")

        code = await cli.run(parse("list"), config, console)

        assert code == 1
        assert output[0].startswith("! ")

    async def test_add_with_missing_fields_fails(self, patched_client, config, console):
        code = await cli.run(parse("add", "--band", "Slayer"), config, console)

        assert code == 1
        assert patched_client.calls_to("create_album") == []

    async def test_delete_with_yes_skips_prompt(self, patched_client, config, console):
        code = await cli.run(parse("delete", "3", "--yes"), config, console)

        assert code == 0
        assert patched_client.calls_to("delete_album")[0]["album_id"] == 3

    async def test_delete_unknown_album(self, patched_client, config, console, output):
        code = await cli.run(parse("delete", "42", "--yes"), config, console)

        assert code == 1
        assert "42" in output[-1]

    async def test_clear_cache(self, patched_client, config, console):
        await cli.run(parse("list"), config, console)

        code = await cli.run(parse("clear-cache"), config, console)

        assert code == 0
        assert '"albums"' not in Path(config.storage_path).read_text()
