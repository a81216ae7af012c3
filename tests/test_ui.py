"""Tests for UI selection and plain output."""

from __future__ import annotations

import io

from ralph_opencode.ui import UI, PlainUI, RichUI, get_ui, normalize_ui_mode


class TestGetUi:
    def test_normalize(self) -> None:
        assert normalize_ui_mode(None) == "auto"
        assert normalize_ui_mode(" PLAIN ") == "plain"
        assert normalize_ui_mode("off") == "plain"
        assert normalize_ui_mode("fancy") == "auto"

    def test_plain_mode(self) -> None:
        assert isinstance(get_ui("plain"), PlainUI)

    def test_rich_mode(self) -> None:
        assert isinstance(get_ui("rich"), RichUI)

    def test_auto_forced_rich(self) -> None:
        assert isinstance(get_ui("auto", force_rich=True), RichUI)

    def test_implementations_match_protocol(self) -> None:
        expected = {name for name in vars(UI) if not name.startswith("_")}
        for impl in (PlainUI, RichUI):
            public = {
                name for name, value in vars(impl).items()
                if callable(value) and not name.startswith("_")
            }
            assert public == expected


class TestPlainUI:
    def test_stream_line_inside_block(self) -> None:
        buffer = io.StringIO()
        ui = PlainUI(no_color=True, ascii_only=True, file=buffer)

        ui.channel_header("AI", "Agent output")
        ui.stream_line("AI", "hello")
        ui.channel_footer("AI", "Agent output")

        lines = buffer.getvalue().splitlines()
        assert lines[0].startswith("+ AI · Agent output ")
        assert lines[1] == "| AI     | hello"
        assert lines[2].startswith("+-")

    def test_messages(self) -> None:
        buffer = io.StringIO()
        ui = PlainUI(no_color=True, file=buffer)

        ui.warn("careful")
        ui.err("broken")
        ui.ok("fine")

        assert buffer.getvalue().splitlines() == ["WARN: careful", "ERROR: broken", "OK: fine"]


class TestRichUI:
    def test_writes_to_file(self) -> None:
        buffer = io.StringIO()
        ui = RichUI(no_color=True, file=buffer)

        ui.kv("Task", "add a button")
        ui.stream_line("AI", "[bold]not markup[/bold]")

        output = buffer.getvalue()
        assert "add a button" in output
        assert "[bold]not markup[/bold]" in output
