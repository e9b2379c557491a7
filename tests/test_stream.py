"""Tests for stream.conf rendering and file access."""

import pytest

from netdata_provisioner.helpers import stream


def test_render_is_pure_function_of_key():
    assert stream.render_stream_config("abc") == stream.render_stream_config("abc")
    assert stream.render_stream_config("abc") != stream.render_stream_config("abd")


def test_render_layout():
    assert stream.render_stream_config("guid") == (
        "\n[guid]\n"
        "        enabled = yes\n"
        "        allow from = *\n"
        "        default memory mode = ram\n"
    )


@pytest.mark.asyncio
async def test_read_api_key(tmp_path):
    key_file = tmp_path / "netdata.public.unique.id"
    key_file.write_text("1234-guid", encoding="utf-8")
    assert await stream.async_read_api_key(str(key_file)) == "1234-guid"


@pytest.mark.asyncio
async def test_read_api_key_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        await stream.async_read_api_key(str(tmp_path / "absent"))


@pytest.mark.asyncio
async def test_write_then_read_back(tmp_path):
    path = str(tmp_path / "stream.conf")
    assert await stream.async_read_stream_config(path) is None
    await stream.async_write_stream_config("content", path)
    assert await stream.async_read_stream_config(path) == "content"
