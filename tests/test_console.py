"""Tests for the rich console helpers."""

import re
from io import StringIO

from rich.console import Console
from rich.table import Table

from eventstream.console import EventPrinter, render_streams
from eventstream.event import Event
from eventstream.registry import StreamRegistry


def make_console():
    """Console writing plain text into a buffer."""
    return Console(file=StringIO(), width=120, color_system=None, force_terminal=False)


class TestEventPrinter:
    """Test cases for EventPrinter."""

    def setup_method(self):
        """Set up test fixtures."""
        self.console = make_console()
        self.printer = EventPrinter(console=self.console)

    def test_initialization(self):
        printer = EventPrinter()
        assert printer.console is not None
        assert printer.show_attributes is True
        assert printer.event_filter is None

    def test_format_event_tags_only(self):
        line = self.printer.format_event(Event(["order", "created"]))
        assert "order, created" in line

    def test_format_event_with_attributes(self):
        line = self.printer.format_event(Event("order", id=7, state="new"))
        assert "id=" in line
        assert "'new'" in line

    def test_format_event_hides_attributes(self):
        printer = EventPrinter(console=self.console, show_attributes=False)
        line = printer.format_event(Event("order", id=7))
        assert "id=" not in line

    def test_markup_in_tags_escaped(self):
        line = self.printer.format_event(Event("[red]not markup[/red]"))
        assert "\\[red]" in line

    def test_prints_published_events(self):
        registry = StreamRegistry()
        registry.add_subscriber(self.printer)

        registry.publish("order", {"id": 7})

        output = self.console.file.getvalue()
        assert "order" in output
        assert "id=7" in output

    def test_filter_respected(self):
        stream = StreamRegistry().register_stream("orders")
        printer = EventPrinter(console=self.console, event_filter=re.compile("^order"))
        stream.add_subscriber(printer)

        stream.publish("order_created")
        stream.publish("user_created")

        output = self.console.file.getvalue()
        assert "order_created" in output
        assert "user_created" not in output


class TestRenderStreams:
    """Test cases for render_streams."""

    def test_renders_default_and_named_streams(self):
        console = make_console()
        registry = StreamRegistry()
        registry.register_stream("audit").subscribe(None, lambda e: None)
        registry.subscribe(None, lambda e: None)
        registry.subscribe("x", lambda e: None)

        table = render_streams(registry, console=console)

        assert isinstance(table, Table)
        assert table.row_count == 2
        output = console.file.getvalue()
        assert "default" in output
        assert "audit" in output
        assert "Event Streams" in output
