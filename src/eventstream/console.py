"""Rich console helpers for watching streams while debugging."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .event import Event, tag_string
from .filters import FilterSpec
from .registry import StreamRegistry
from .stream import Subscriber


class EventPrinter(Subscriber):
    """Subscriber that prints every event it receives on one line."""

    def __init__(
        self,
        console: Optional[Console] = None,
        show_attributes: bool = True,
        event_filter: FilterSpec = None,
    ) -> None:
        self.console = console or Console()
        self.show_attributes = show_attributes
        self.event_filter = event_filter

    def format_event(self, event: Event) -> str:
        """Build the markup line for an event."""
        tags = ", ".join(escape(tag_string(tag)) for tag in event.tags)
        line = f"[bold cyan]{tags}[/bold cyan]"
        if self.show_attributes and event.attributes:
            pairs = " ".join(
                f"{escape(name)}=[green]{escape(repr(value))}[/green]"
                for name, value in event.to_dict()["attributes"].items()
            )
            line += f" {pairs}"
        return line

    def handle(self, event: Event) -> None:
        self.console.print(self.format_event(event))


def render_streams(registry: StreamRegistry, console: Optional[Console] = None) -> Table:
    """Print a table of the default stream and all named streams."""
    console = console or Console()

    table = Table(title="Event Streams")
    table.add_column("Stream", style="cyan")
    table.add_column("Subscribers", justify="right", style="magenta")

    default = registry.default_stream()
    table.add_row(f"{default.name} [dim](default)[/dim]", str(default.subscriber_count))
    for name in registry.names():
        stream = registry.get(name)
        if stream is None:
            # Unregistered between names() and get()
            continue
        table.add_row(escape(str(name)), str(stream.subscriber_count))

    console.print(table)
    return table
