#!/usr/bin/env python3
"""
View recent product events from the event log (EVENTS_FILE).

Provides filtered access to the event log with options to filter by
record id and event type.
"""

import json
from typing import Optional

import typer

from resumecraft.utils.event_logging import get_recent_events
from resumecraft.utils.timestamp import format_timestamp

app = typer.Typer(
    add_completion=False,
    help="View recent resume events",
)


@app.command()
def main(
    n: int = typer.Option(10, "--num", "-n", help="Number of recent events to show"),
    resume_id: Optional[str] = typer.Option(
        None, "--resume", "-r", help="Filter to events for this record id"
    ),
    event_type: Optional[str] = typer.Option(
        None, "--event-type", "-e", help="Filter to events of this type"
    ),
    compact: bool = typer.Option(
        False, "--compact", "-c", help="Print one event per line (no pretty formatting)"
    ),
):
    """
    Show the last n events from the event log.

    Examples:\n

        $ python scripts/tail_events.py                        # Last 10 events

        $ python scripts/tail_events.py -e export_completed    # Last 10 exports

        $ python scripts/tail_events.py -n 5 -r 4f3c...        # Last 5 events for one record
    """
    events = get_recent_events(n=n, event_type=event_type, resume_id=resume_id)

    if not events:
        typer.secho("No events found", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)

    if not compact:
        filters = []
        if resume_id:
            filters.append(f"resume={resume_id}")
        if event_type:
            filters.append(f"type={event_type}")
        suffix = f" [{', '.join(filters)}]" if filters else ""
        typer.secho(f"\nShowing last {len(events)} event(s){suffix}:\n", fg=typer.colors.BLUE)

    for event in events:
        if compact:
            typer.echo(json.dumps(event, ensure_ascii=False))
        else:
            typer.secho(
                f"{format_timestamp(event.get('timestamp', ''), relative=True):>10}  "
                f"{event.get('event_type', '?')}",
                bold=True,
            )
            typer.echo(json.dumps(event, indent=2, ensure_ascii=False))
            typer.echo("")


if __name__ == "__main__":
    app()
