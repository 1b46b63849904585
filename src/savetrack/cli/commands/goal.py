"""Savings goal commands."""

import click
from savetrack.cli.account_resolution import resolve_account_or_exit
from savetrack.cli.error_handling import handle_domain_error
from savetrack.config import DEFAULT_PRIORITY
from savetrack.domain.account import AccountService
from savetrack.domain.analytics import AnalyticsService
from savetrack.domain.entities import GoalMilestone, GoalStatus, GoalWithProgress, TimelineProjection
from savetrack.domain.goal import GoalService
from savetrack.domain.projection import ProjectionService
from savetrack.utils.amount_parser import parse_amount
from savetrack.utils.date_parser import parse_date

STATUS_CHOICES = [status.value for status in GoalStatus]


def _format_milestone(milestone: GoalMilestone) -> str:
    mark = "x" if milestone.is_achieved else " "
    line = f"[{mark}] {milestone.percentage:3d}%  {milestone.target_amount:>12}"
    if milestone.is_achieved and milestone.achieved_at is not None:
        line += f"  reached {milestone.achieved_at:%Y-%m-%d}"
    return line


def _format_goal_row(item: GoalWithProgress) -> str:
    goal = item.goal
    return (
        f"ID: {goal.id:3d} | {goal.name:20s} | {goal.current_amount:>10} / {goal.target_amount:<10} "
        f"| {item.progress_percentage:>6}% | {goal.status.value:9s} | {item.track_status.value}"
    )


def _echo_projection(projection: TimelineProjection) -> None:
    click.echo(f"Target date:        {projection.target_date}")
    if projection.projected_completion_date is None:
        click.echo("Projected finish:   never at the current savings rate")
    else:
        click.echo(
            f"Projected finish:   {projection.projected_completion_date} "
            f"({projection.variance_in_days:+d} days vs target)"
        )
    click.echo(f"Average monthly:    {projection.average_monthly_savings}")
    click.echo(f"Required monthly:   {projection.required_monthly_savings}")
    click.echo(f"On track:           {'yes' if projection.is_on_track else 'no'}")
    click.echo(f"Trend:              {projection.trend_direction.value}")
    click.echo(f"Confidence:         {projection.confidence_level}%")


@click.group()
def goal_group():
    """Manage savings goals."""
    pass


@goal_group.command("create")
@click.argument("name", metavar="GOAL_NAME")
@click.option("--account", required=True, help="Linked account name or ID")
@click.option("--target", "target", required=True, help="Target amount")
@click.option("--by", "target_date", required=True, help="Target date (e.g., 2027-06-30, 'in 6 months')")
@click.option("--description", help="Optional description")
@click.option(
    "--priority",
    type=click.IntRange(1, 10),
    default=DEFAULT_PRIORITY,
    show_default=True,
    help="Priority from 1 (lowest) to 10 (highest)",
)
@click.pass_context
def create_goal(
    ctx, name: str, account: str, target: str, target_date: str, description: str | None, priority: int
):
    """Create a savings goal linked to an account.

    The account's current balance is recorded as the goal's starting point.

    Examples:
        savetrack goal create "New Car" --account "Car Fund" --target 15000 --by 2028-01-01
        savetrack goal create "Vacation" --account 2 --target 3000 --by "in 8 months" --priority 7
    """
    db = ctx.obj["db"]
    user_id = ctx.obj["user"]
    account_id = resolve_account_or_exit(ctx, AccountService(db), account)

    try:
        goal = GoalService(db).create_goal(
            user_id,
            account_id=account_id,
            name=name,
            target_amount=parse_amount(target),
            target_date=parse_date(target_date),
            description=description,
            priority=priority,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created goal '{goal.name}' (ID: {goal.id})")
    click.echo(f"Starting balance: {goal.initial_balance}, target {goal.target_amount} by {goal.target_date}")


@goal_group.command("list")
@click.pass_context
def list_goals(ctx):
    """List goals with their progress, highest priority first."""
    db = ctx.obj["db"]
    goals = GoalService(db).get_user_goals(ctx.obj["user"])

    if not goals:
        click.echo("No goals found.")
        return

    click.echo("\nGoals:")
    click.echo("-" * 100)
    for item in goals:
        click.echo(_format_goal_row(item))


@goal_group.command("show")
@click.argument("goal_id", type=int)
@click.pass_context
def show_goal(ctx, goal_id: int):
    """Show a goal's progress, milestones, history and projection."""
    db = ctx.obj["db"]
    try:
        report = GoalService(db).get_goal_progress(ctx.obj["user"], goal_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    item = report.goal
    goal = item.goal
    click.echo(f"\n{goal.name} (ID: {goal.id}) - {goal.status.value}, priority {goal.priority}")
    if goal.description:
        click.echo(goal.description)
    click.echo(f"Account:            {item.account_name}")
    click.echo(f"Progress:           {goal.current_amount} / {goal.target_amount} ({item.progress_percentage}%)")
    click.echo(f"Saved since start:  {goal.saved_amount}")
    click.echo(f"Remaining:          {item.remaining_amount} in {item.days_remaining} days")
    click.echo(f"Needed per day:     {item.required_daily_savings}")
    click.echo(f"Saving per day:     {item.actual_daily_savings}")

    click.echo("\nMilestones:")
    for milestone in item.milestones:
        click.echo(f"  {_format_milestone(milestone)}")

    if report.history:
        click.echo("\nHistory:")
        for point in report.history:
            click.echo(
                f"  {point.recorded_at:%Y-%m-%d %H:%M}  {point.amount:>12}  "
                f"{point.change_amount:>+12}  {point.progress_percentage:>6}%"
            )

    click.echo("\nProjection:")
    _echo_projection(report.projection)


@goal_group.command("update")
@click.argument("goal_id", type=int)
@click.option("--name", help="New name")
@click.option("--description", help="New description")
@click.option("--target", help="New target amount")
@click.option("--by", "target_date", help="New target date")
@click.option("--priority", type=click.IntRange(1, 10), help="New priority")
@click.option("--status", type=click.Choice(STATUS_CHOICES), help="New status")
@click.pass_context
def update_goal(
    ctx,
    goal_id: int,
    name: str | None,
    description: str | None,
    target: str | None,
    target_date: str | None,
    priority: int | None,
    status: str | None,
):
    """Update fields of a goal.

    Changing the target amount also rewrites the milestone amounts.

    Examples:
        savetrack goal update 1 --target 20000
        savetrack goal update 1 --status paused
    """
    db = ctx.obj["db"]
    try:
        updates = {}
        if name is not None:
            updates["name"] = name
        if description is not None:
            updates["description"] = description
        if target is not None:
            updates["target_amount"] = parse_amount(target)
        if target_date is not None:
            updates["target_date"] = parse_date(target_date)
        if priority is not None:
            updates["priority"] = priority
        if status is not None:
            updates["status"] = status

        if not updates:
            click.echo("Nothing to update.")
            return

        goal = GoalService(db).update_goal(ctx.obj["user"], goal_id, **updates)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Updated goal '{goal.name}' (ID: {goal.id})")


@goal_group.command("delete")
@click.argument("goal_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_goal(ctx, goal_id: int, yes: bool):
    """Delete a goal with its milestones and history."""
    db = ctx.obj["db"]
    user_id = ctx.obj["user"]
    service = GoalService(db)

    try:
        goal = service.get_goal(user_id, goal_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if not yes and not click.confirm(f"Are you sure you want to delete goal '{goal.name}' (ID: {goal_id})?"):
        click.echo("Deletion cancelled.")
        return

    service.delete_goal(user_id, goal_id)
    click.echo(f"Deleted goal '{goal.name}'")


@goal_group.command("project")
@click.argument("goal_id", type=int)
@click.option("--points", is_flag=True, help="Also print the monthly projection points")
@click.pass_context
def project_goal(ctx, goal_id: int, points: bool):
    """Project when a goal will be reached at its current savings rate."""
    db = ctx.obj["db"]
    try:
        projection = ProjectionService(db).get_timeline_projection(goal_id, ctx.obj["user"])
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    _echo_projection(projection)
    if points:
        click.echo("\nDate        Projected     Linear target")
        for point in projection.projection_data:
            click.echo(f"{point.date}  {point.projected_amount:>12}  {point.monthly_target:>12}")


@goal_group.command("analytics")
@click.pass_context
def goal_analytics(ctx):
    """Summarize all goals."""
    db = ctx.obj["db"]
    analytics = AnalyticsService(db).get_goal_analytics(ctx.obj["user"])

    click.echo(
        f"Goals: {analytics.total_goals} total, {analytics.active_goals} active, "
        f"{analytics.completed_goals} completed"
    )
    click.echo(
        f"Saved: {analytics.total_current_amount} of {analytics.total_target_amount} "
        f"({analytics.average_progress}%)"
    )
    click.echo(
        f"Active goals: {analytics.on_track_goals} on track, {analytics.behind_goals} behind, "
        f"{analytics.ahead_goals} ahead"
    )

    if analytics.upcoming_milestones:
        click.echo("\nUpcoming milestones:")
        for milestone in analytics.upcoming_milestones:
            click.echo(f"  goal {milestone.goal_id}: {_format_milestone(milestone)}")
    if analytics.recent_achievements:
        click.echo("\nRecent achievements:")
        for milestone in analytics.recent_achievements:
            click.echo(f"  goal {milestone.goal_id}: {_format_milestone(milestone)}")


@goal_group.command("notified")
@click.argument("milestone_id", type=int)
@click.pass_context
def milestone_notified(ctx, milestone_id: int):
    """Mark a milestone's achievement alert as delivered."""
    db = ctx.obj["db"]
    try:
        milestone = GoalService(db).mark_milestone_notified(ctx.obj["user"], milestone_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Milestone {milestone.id} ({milestone.percentage}%) marked as notified")


def register_commands(cli):
    """Register goal commands with main CLI."""
    cli.add_command(goal_group, name="goal")
