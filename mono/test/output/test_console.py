from __future__ import annotations

import pytest

from mono.output.console import MockConsole, RichConsole, Style


def test_mock_console_records_styles() -> None:
    console = MockConsole()
    console.debug("found module")
    console.error("boom")
    console.success("done")

    assert console.messages == ["debug: found module", "error: boom", "OK done"]
    assert console.count(Style.DEBUG) == 1
    assert console.has_error()
    assert console.find("module")[0].style == Style.DEBUG


def test_rich_console_drops_debug_unless_enabled(capsys: pytest.CaptureFixture[str]) -> None:
    RichConsole().debug("hidden message")
    RichConsole(debug=True).debug("visible message")

    out = capsys.readouterr().out
    assert "hidden message" not in out
    assert "visible message" in out


def test_rich_console_prints_markup_like_text_verbatim(capsys: pytest.CaptureFixture[str]) -> None:
    RichConsole().error("missing lock entry for [example.com/a] v1.0.0")

    assert "[example.com/a]" in capsys.readouterr().out
