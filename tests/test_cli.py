import json
from pathlib import Path

import pytest

import translation_cache.cli as cli


def test_parse_arguments_lookup():
    args = cli.parse_arguments(
        ["--cache-file", "c.json", "lookup", "Hello", "--source", "en", "--target", "zh"]
    )
    assert args.command == "lookup"
    assert args.cache_file == "c.json"
    assert args.text == "Hello"
    assert args.service == "qianwen"


def test_parse_arguments_requires_command():
    with pytest.raises(SystemExit):
        cli.parse_arguments([])


@pytest.mark.asyncio
async def test_preheat_then_lookup(cache_file: Path, capsys):
    assert await cli.main(["--cache-file", str(cache_file), "preheat"]) == 0
    assert len(json.loads(cache_file.read_text(encoding="utf-8"))) == 4

    exit_code = await cli.main(
        ["--cache-file", str(cache_file), "lookup", "Thank you", "--source", "en", "--target", "zh"]
    )

    assert exit_code == 0
    assert capsys.readouterr().out.strip() == "谢谢"


@pytest.mark.asyncio
async def test_lookup_miss_returns_nonzero(cache_file: Path, capsys):
    exit_code = await cli.main(
        ["--cache-file", str(cache_file), "lookup", "Hi", "--source", "en", "--target", "zh"]
    )
    assert exit_code == 1
    assert "(not cached)" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_stats_and_clear(cache_file: Path, capsys):
    await cli.main(["--cache-file", str(cache_file), "preheat"])

    assert await cli.main(["--cache-file", str(cache_file), "stats"]) == 0
    out = capsys.readouterr().out
    assert "Cache Statistics" in out
    assert "Total Entries: 4" in out

    assert await cli.main(["--cache-file", str(cache_file), "clear"]) == 0
    assert json.loads(cache_file.read_text(encoding="utf-8")) == []


@pytest.mark.asyncio
async def test_clear_expired_command(cache_file: Path):
    cache_file.write_text(
        json.dumps(
            [
                {
                    "original_text": "Hello",
                    "translated_text": "你好",
                    "source_language": "en",
                    "target_language": "zh",
                    "service": "qianwen",
                    "created_at": "2000-01-01T00:00:00",
                    "cache_key": "stale",
                }
            ]
        ),
        encoding="utf-8",
    )

    assert await cli.main(["--cache-file", str(cache_file), "clear-expired"]) == 0
    assert json.loads(cache_file.read_text(encoding="utf-8")) == []
