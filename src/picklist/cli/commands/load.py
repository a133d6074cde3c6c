"""Order load and refresh commands."""

import click
from picklist.cli.error_handling import handle_domain_error
from picklist.domain.entities import ExtractionResult
from picklist.domain.order_loading import OrderLoadService
from picklist.utils.date_parser import resolve_date_argument


def _resolve_target(ctx, date_arg: str | None) -> str | None:
    if not date_arg:
        return None
    try:
        return resolve_date_argument(date_arg)
    except ValueError as e:
        handle_domain_error(ctx, e)


def _echo_skips(extraction: ExtractionResult, target_date: str | None) -> None:
    if extraction.unmatched_fields:
        click.echo(
            f"  Columns not found for: {', '.join(extraction.unmatched_fields)}", err=True
        )
    if extraction.skipped_missing_sku:
        click.echo(f"  {extraction.skipped_missing_sku} rows skipped due to missing SKU")
    if target_date and extraction.skipped_by_date:
        click.echo(f"  {extraction.skipped_by_date} rows skipped by date filter")
    if target_date and not extraction.orders and extraction.total_rows:
        click.echo(f"  No rows matched target date {target_date}", err=True)


@click.command("load")
@click.argument("csv_file", type=click.Path(exists=True))
@click.option("--date", "date_arg", help="Only load rows for this date (e.g. 2024-07-05, today)")
@click.option("--merge", is_flag=True, help="Add only new order lines to the loaded orders")
@click.pass_context
def load_orders(ctx, csv_file: str, date_arg: str | None, merge: bool):
    """Load order lines from CSV_FILE."""
    service = OrderLoadService(ctx.obj["db"])
    target_date = _resolve_target(ctx, date_arg)

    try:
        result = service.load(csv_file, target_date=target_date, merge=merge)
    except (ValueError, OSError) as e:
        handle_domain_error(ctx, e)

    click.echo("\nLoad complete:")
    click.echo(f"  Rows read: {result.extraction.total_rows}")
    if merge:
        click.echo(f"  New order lines: {len(result.new_orders)}")
    else:
        click.echo(f"  Order lines loaded: {len(result.new_orders)}")
    click.echo(f"  Total loaded: {result.total_orders}")
    _echo_skips(result.extraction, target_date)


@click.command("refresh")
@click.argument("csv_file", type=click.Path(exists=True))
@click.option("--date", "date_arg", help="Date to check (defaults to the last loaded date)")
@click.option("--apply", is_flag=True, help="Merge the new order lines into the loaded orders")
@click.pass_context
def refresh_orders(ctx, csv_file: str, date_arg: str | None, apply: bool):
    """Check CSV_FILE for order lines that are not loaded yet."""
    db = ctx.obj["db"]
    service = OrderLoadService(db)
    target_date = _resolve_target(ctx, date_arg) or db.get_selected_date()

    try:
        if apply:
            result = service.load(csv_file, target_date=target_date, merge=True)
            new_orders = result.new_orders
        else:
            new_orders = service.check_new(csv_file, target_date=target_date)
    except (ValueError, OSError) as e:
        handle_domain_error(ctx, e)

    if not new_orders:
        click.echo("No new orders.")
        return

    verb = "Added" if apply else "Found"
    click.echo(f"{verb} {len(new_orders)} new order line(s):")
    for order in new_orders:
        click.echo(f"  {order.order_number:<16} {order.sku:<20} x{order.quantity}  {order.customer_name}")
    if not apply:
        click.echo("Run again with --apply to add them.")


def register_commands(cli):
    """Register load commands with main CLI."""
    cli.add_command(load_orders)
    cli.add_command(refresh_orders)
