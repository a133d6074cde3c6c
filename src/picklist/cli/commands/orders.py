"""Grouped order view and picking commands."""

import click
from picklist.cli.error_handling import handle_domain_error
from picklist.domain.entities import GroupFilter, OrderGroup, ProblemStatus
from picklist.domain.errors import DomainError
from picklist.domain.order_grouping import count_groups, filter_groups, group_orders
from picklist.domain.order_loading import OrderLoadService


def _group_label(group: OrderGroup) -> str:
    if group.is_merged_order:
        return f"Merged orders: {', '.join(group.order_numbers)}"
    if group.is_multiple_items:
        return f"Order {group.order_number} ({len(group.items)} items)"
    return f"Order {group.order_number}"


@click.command("orders")
@click.option("--hide-completed", is_flag=True, help="Hide fully completed groups")
@click.option("--hide-incomplete", is_flag=True, help="Hide groups with items left to pick")
@click.option("--hide-merged", is_flag=True, help="Hide merged orders")
@click.option("--hide-multiple", is_flag=True, help="Hide multi-item orders")
@click.option("--hide-single", is_flag=True, help="Hide single-item orders")
@click.option("--hide-problems", is_flag=True, help="Hide groups with reported problems")
@click.option("--only-problems", is_flag=True, help="Show only groups with reported problems")
@click.option(
    "--hide-status",
    multiple=True,
    type=click.Choice([s.value for s in ProblemStatus]),
    help="Hide groups with a problem in this status (repeatable)",
)
@click.pass_context
def view_orders(
    ctx,
    hide_completed: bool,
    hide_incomplete: bool,
    hide_merged: bool,
    hide_multiple: bool,
    hide_single: bool,
    hide_problems: bool,
    only_problems: bool,
    hide_status: tuple[str, ...],
):
    """View loaded orders grouped by customer."""
    service = OrderLoadService(ctx.obj["db"])
    orders = service.loaded_orders()

    if not orders:
        click.echo("No orders loaded. Use 'load' to load a sheet export.")
        return

    group_filter = GroupFilter(
        show_completed=not hide_completed,
        show_incomplete=not hide_incomplete,
        show_merged_orders=not hide_merged,
        show_multiple_items=not hide_multiple,
        show_single_items=not hide_single,
        show_with_problems=not hide_problems,
        show_without_problems=not only_problems,
        show_problems_pending=ProblemStatus.PENDING.value not in hide_status,
        show_problems_in_progress=ProblemStatus.IN_PROGRESS.value not in hide_status,
        show_problems_escalated=ProblemStatus.ESCALATED.value not in hide_status,
        show_problems_resolved=ProblemStatus.RESOLVED.value not in hide_status,
    )

    groups = group_orders(orders)
    counts = count_groups(groups)
    visible = filter_groups(groups, group_filter)

    click.echo(f"\nShowing {len(visible)} of {counts.total} group(s):")
    click.echo("-" * 80)
    for group in visible:
        status = "✓" if group.is_completed else " "
        click.echo(
            f"{status} {group.customer_name:<28} {_group_label(group):<36} "
            f"{group.completed_items}/{group.total_items}"
        )
        for item in group.items:
            problem = f" [{item.problem_status.value}]" if item.problem_status else ""
            click.echo(f"      {item.sku:<20} x{item.quantity:<4} {item.location}{problem}")

    click.echo("-" * 80)
    click.echo(
        f"Completed: {counts.completed}  Incomplete: {counts.incomplete}  "
        f"Merged: {counts.merged_orders}  Multiple: {counts.multiple_items}  "
        f"Single: {counts.single_items}"
    )
    click.echo(
        f"Problems: {counts.with_problems}  No problems: {counts.without_problems}  "
        f"Pending: {counts.pending}  In progress: {counts.in_progress}  "
        f"Escalated: {counts.escalated}  Resolved: {counts.resolved}"
    )


@click.command("complete")
@click.argument("order_number")
@click.option("--sku", help="Only complete the line with this SKU")
@click.pass_context
def complete_order(ctx, order_number: str, sku: str | None):
    """Mark the loaded lines of ORDER_NUMBER as picked."""
    service = OrderLoadService(ctx.obj["db"])
    try:
        updated = service.complete(order_number, sku=sku)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Completed {updated} line(s) of order {order_number}")


@click.command("problem")
@click.argument("order_number")
@click.option("--sku", help="Only update the line with this SKU")
@click.option(
    "--status",
    type=click.Choice([s.value for s in ProblemStatus]),
    help="Problem status to set",
)
@click.option("--clear", is_flag=True, help="Remove the problem status")
@click.pass_context
def set_problem(ctx, order_number: str, sku: str | None, status: str | None, clear: bool):
    """Report, update or clear a problem on the loaded lines of ORDER_NUMBER."""
    if bool(status) == clear:
        click.echo("Error: Give exactly one of --status or --clear", err=True)
        ctx.exit(1)

    service = OrderLoadService(ctx.obj["db"])
    try:
        if clear:
            updated = service.clear_problem(order_number, sku=sku)
        else:
            updated = service.report_problem(order_number, ProblemStatus(status), sku=sku)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if clear:
        click.echo(f"Cleared problem on {updated} line(s) of order {order_number}")
    else:
        click.echo(f"Set problem '{status}' on {updated} line(s) of order {order_number}")


def register_commands(cli):
    """Register order commands with main CLI."""
    cli.add_command(view_orders)
    cli.add_command(complete_order)
    cli.add_command(set_problem)
