"""Available dates command."""

import click
from picklist.cli.error_handling import handle_domain_error
from picklist.domain.order_loading import OrderLoadService
from picklist.utils.date_parser import DISPLAY_FORMATS, to_display


@click.command("dates")
@click.argument("csv_file", type=click.Path(exists=True))
@click.option(
    "--format",
    "display_format",
    type=click.Choice(DISPLAY_FORMATS),
    default="DD/MM/YYYY",
    show_default=True,
    help="Display format for dates (MM/DD/YYYY output is display only: --date reads dates day-first)",
)
@click.pass_context
def list_dates(ctx, csv_file: str, display_format: str):
    """List the dates present in CSV_FILE, newest first."""
    db = ctx.obj["db"]
    service = OrderLoadService(db)

    try:
        dates = service.available_dates(csv_file)
    except OSError as e:
        handle_domain_error(ctx, e)

    if not dates:
        click.echo("No dates found. Check the fileDate/orderDate column mapping.")
        return

    selected = db.get_selected_date()
    click.echo(f"\nFound {len(dates)} date(s):")
    for canonical in dates:
        marker = " *" if canonical == selected else ""
        click.echo(f"  {to_display(canonical, display_format)}  ({canonical}){marker}")


def register_commands(cli):
    """Register dates command with main CLI."""
    cli.add_command(list_dates)
