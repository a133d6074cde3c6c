"""Column mapping commands."""

import click
from picklist.cli.error_handling import handle_domain_error
from picklist.domain.column_mapping import (
    ORDER_FIELDS,
    PACKAGING_FIELDS,
    ColumnMappingService,
    resolve_columns,
    unmatched_fields,
)
from picklist.domain.errors import DomainError
from picklist.utils.table_reader import read_table, split_table


@click.group()
def mapping_group():
    """Manage the sheet column mapping."""
    pass


@mapping_group.command("show")
@click.pass_context
def show_mapping(ctx):
    """Show the column mapping."""
    service = ColumnMappingService(ctx.obj["db"])
    mapping = service.get_mapping()

    title = "Column Mapping (default)" if service.is_default() else "Column Mapping"
    click.echo(f"\n{title}:")
    click.echo("-" * 60)
    for field_key in ORDER_FIELDS:
        header = mapping.get(field_key) or ""
        suffix = " [packaging]" if field_key in PACKAGING_FIELDS else ""
        click.echo(f"  {field_key:<20} {header or '(unmapped)'}{suffix}")


@mapping_group.command("set")
@click.argument("field")
@click.argument("header")
@click.pass_context
def set_mapping(ctx, field: str, header: str):
    """Map FIELD to the sheet column titled HEADER."""
    service = ColumnMappingService(ctx.obj["db"])
    try:
        service.set_field(field, header)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Mapped '{field}' to column '{header.strip()}'")


@mapping_group.command("clear")
@click.argument("field")
@click.pass_context
def clear_mapping(ctx, field: str):
    """Unmap FIELD."""
    service = ColumnMappingService(ctx.obj["db"])
    try:
        service.clear_field(field)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Unmapped '{field}'")


@mapping_group.command("reset")
@click.pass_context
def reset_mapping(ctx):
    """Restore the default column mapping."""
    ColumnMappingService(ctx.obj["db"]).reset()
    click.echo("Column mapping reset to defaults")


@mapping_group.command("check")
@click.argument("csv_file", type=click.Path(exists=True))
@click.pass_context
def check_mapping(ctx, csv_file: str):
    """Check the column mapping against the header of CSV_FILE."""
    service = ColumnMappingService(ctx.obj["db"])
    mapping = service.get_mapping()

    try:
        header_row, _ = split_table(read_table(csv_file))
    except OSError as e:
        handle_domain_error(ctx, e)

    columns = resolve_columns(header_row, mapping)
    missing = unmatched_fields(header_row, mapping)

    click.echo(f"\nResolved {len(columns)} field(s):")
    for field_key, index in columns.items():
        click.echo(f"  ✓ {field_key:<20} column {index + 1} ({header_row[index]})")

    if missing:
        click.echo(f"\nNot found in header ({len(missing)}):")
        for field_key in missing:
            click.echo(f"  ✗ {field_key:<20} '{mapping[field_key]}'")

    if "sku" not in columns:
        click.echo("\nWarning: SKU column not found; every row would be skipped.", err=True)


def register_commands(cli):
    """Register mapping commands with main CLI."""
    cli.add_command(mapping_group, name="mapping")
