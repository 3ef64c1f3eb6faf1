"""Command-line interface for BudgetBuddy."""

from __future__ import annotations

from contextlib import contextmanager
from decimal import Decimal
from typing import Iterator, Optional

import click

from .config import BaseConfig
from .constants.categories import CATEGORY_CHOICES, ExpenseCategory
from .context import AppContext, create_app_context
from .errors import BudgetBuddyError, Unauthenticated
from .logging_config import setup_logging
from .money import format_money, to_money
from .services import auth, budgeting, expenses, savings
from .services.aggregation import BudgetHealth, cap_for_display
from .services.dashboard import load_dashboard

BAR_WIDTH = 20

_category_type = click.Choice([value for value, _ in CATEGORY_CHOICES], case_sensitive=False)
_date_type = click.DateTime(formats=["%Y-%m-%d"])


@contextmanager
def _domain_errors() -> Iterator[None]:
    """Turn domain failures into clean CLI errors."""
    try:
        yield
    except Unauthenticated as exc:
        raise click.ClickException(f"Not signed in: {exc}") from exc
    except BudgetBuddyError as exc:
        raise click.ClickException(str(exc)) from exc


def _money(app: AppContext, amount: Decimal) -> str:
    return format_money(amount, app.config.CURRENCY_SYMBOL)


def _bar(percentage: Decimal) -> str:
    filled = int(cap_for_display(percentage) * BAR_WIDTH / 100)
    return "[" + "#" * filled + "-" * (BAR_WIDTH - filled) + "]"


def _health_note(health: BudgetHealth) -> str:
    if health is BudgetHealth.OVER_BUDGET:
        return "  Over budget!"
    if health is BudgetHealth.NEAR_LIMIT:
        return "  Almost at limit"
    return ""


@click.group()
@click.option("--username", envvar="BUDGETBUDDY_USERNAME", default=None, help="Account to act as")
@click.option("--password", envvar="BUDGETBUDDY_PASSWORD", default=None, help="Account password")
@click.pass_context
def cli(ctx: click.Context, username: Optional[str], password: Optional[str]) -> None:
    """Track expenses, budgets and savings goals."""

    if ctx.obj is None:
        config = BaseConfig()
        setup_logging(config)
        ctx.obj = create_app_context(config)
    if username:
        with _domain_errors():
            ctx.obj.sign_in(username, password or "")


@cli.command()
@click.argument("username")
@click.password_option()
@click.pass_obj
def register(app: AppContext, username: str, password: str) -> None:
    """Create a new account."""

    with _domain_errors():
        user = auth.create_user(
            username=username, password=password, session_factory=app.session_factory
        )
    click.echo(f"Account created for {user.username}.")


@cli.command()
@click.pass_obj
def dashboard(app: AppContext) -> None:
    """Show this month's spending, budget and savings overview."""

    with _domain_errors():
        view = load_dashboard(
            expense_repo=app.expense_repo,
            budget_repo=app.budget_repo,
            goal_repo=app.goal_repo,
            user_id=app.require_user_id(),
        )
    summary = view.summary

    utilization = summary.budget_utilization
    usage = "No budget set" if utilization is None else f"{utilization:.0f}% of budget"
    click.echo(f"Monthly Spending: {_money(app, summary.total_monthly_spend)} ({usage})")
    if summary.is_over_budget:
        remaining = "Over budget"
    else:
        remaining = f"{_money(app, summary.remaining_budget)} remaining"
    click.echo(f"Total Budget: {_money(app, summary.total_monthly_budget)} ({remaining})")
    click.echo(
        f"Savings Progress: {summary.average_savings_progress_percentage:.0f}% "
        "(Average across goals)"
    )

    click.echo("")
    click.echo("Recent Expenses")
    if not summary.recent_expenses:
        click.echo("  No expenses this month")
    for expense in summary.recent_expenses:
        label = ExpenseCategory(expense.category).label
        note = f" - {expense.description}" if expense.description else ""
        click.echo(f"  {expense.date.isoformat()}  {label:<10} {_money(app, expense.amount)}{note}")


# ---------------------------------------------------------------------------
# Expenses
# ---------------------------------------------------------------------------


@cli.group("expense")
def expense_group() -> None:
    """Record and review expenses."""


@expense_group.command("add")
@click.argument("amount")
@click.argument("category", type=_category_type)
@click.option("--date", "spent_on", type=_date_type, default=None, help="YYYY-MM-DD (default today)")
@click.option("--description", default=None, help="Optional note")
@click.pass_obj
def expense_add(app: AppContext, amount: str, category: str, spent_on, description: Optional[str]) -> None:
    """Add an expense."""

    with _domain_errors():
        saved = expenses.add_expense(
            app.expense_repo,
            amount=amount,
            category=category,
            spent_on=spent_on.date() if spent_on else None,
            description=description,
            user_id=app.require_user_id(),
        )
    click.echo(f"Expense added: #{saved.id} {_money(app, saved.amount)} ({saved.category.label})")


@expense_group.command("list")
@click.pass_obj
def expense_list(app: AppContext) -> None:
    """List this month's expenses."""

    with _domain_errors():
        rows = expenses.monthly_expenses(app.expense_repo, user_id=app.require_user_id())
    if not rows:
        click.echo("No expenses this month")
    for expense in rows:
        label = ExpenseCategory(expense.category).label
        click.echo(f"#{expense.id}  {expense.date.isoformat()}  {label:<10} {_money(app, expense.amount)}")


@expense_group.command("delete")
@click.argument("expense_id", type=int)
@click.pass_obj
def expense_delete(app: AppContext, expense_id: int) -> None:
    """Delete an expense."""

    with _domain_errors():
        expenses.delete_expense(app.expense_repo, expense_id, user_id=app.require_user_id())
    click.echo("Expense deleted")


# ---------------------------------------------------------------------------
# Budgets
# ---------------------------------------------------------------------------


@cli.group("budget")
def budget_group() -> None:
    """Set and track monthly spending limits."""


@budget_group.command("add")
@click.argument("category", type=_category_type)
@click.argument("limit_amount")
@click.pass_obj
def budget_add(app: AppContext, category: str, limit_amount: str) -> None:
    """Add a monthly budget for a category."""

    with _domain_errors():
        saved = budgeting.create_budget(
            app.budget_repo,
            category=category,
            limit_amount=limit_amount,
            user_id=app.require_user_id(),
        )
    click.echo(f"Budget added: #{saved.id} {saved.category.label} {_money(app, saved.limit_amount)}")


@budget_group.command("set")
@click.argument("budget_id", type=int)
@click.argument("limit_amount")
@click.pass_obj
def budget_set(app: AppContext, budget_id: int, limit_amount: str) -> None:
    """Change a budget's monthly limit."""

    with _domain_errors():
        updated = budgeting.update_budget_limit(
            app.budget_repo, budget_id, limit_amount=limit_amount, user_id=app.require_user_id()
        )
    click.echo(f"Budget #{updated.id} limit is now {_money(app, updated.limit_amount)}")


@budget_group.command("list")
@click.pass_obj
def budget_list(app: AppContext) -> None:
    """Show spend against each budget this month."""

    with _domain_errors():
        statuses = budgeting.load_budget_statuses(
            app.budget_repo, app.expense_repo, user_id=app.require_user_id()
        )
    if not statuses:
        click.echo("No budgets yet")
    for status in statuses:
        label = ExpenseCategory(status.budget.category).label
        click.echo(
            f"#{status.budget.id} {label}: {_money(app, status.spent)} of "
            f"{_money(app, status.budget.limit_amount)}"
        )
        click.echo(
            f"    {_bar(status.percentage)} {status.percentage:.0f}% used{_health_note(status.health)}"
        )

    with _domain_errors():
        breakdown = budgeting.monthly_spend_by_category(
            app.expense_repo, user_id=app.require_user_id()
        )
    if breakdown:
        click.echo("")
        click.echo("Spending by category")
    for category, spent in breakdown.items():
        click.echo(f"  {category.label:<10} {_money(app, spent)}")


@budget_group.command("delete")
@click.argument("budget_id", type=int)
@click.pass_obj
def budget_delete(app: AppContext, budget_id: int) -> None:
    """Delete a budget."""

    with _domain_errors():
        budgeting.delete_budget(app.budget_repo, budget_id, user_id=app.require_user_id())
    click.echo("Budget deleted")


# ---------------------------------------------------------------------------
# Savings goals
# ---------------------------------------------------------------------------


@cli.group("goal")
def goal_group() -> None:
    """Track progress towards savings targets."""


@goal_group.command("add")
@click.argument("title")
@click.argument("target_amount")
@click.option("--target-date", type=_date_type, default=None, help="YYYY-MM-DD")
@click.pass_obj
def goal_add(app: AppContext, title: str, target_amount: str, target_date) -> None:
    """Create a savings goal."""

    with _domain_errors():
        saved = savings.create_goal(
            app.goal_repo,
            title=title,
            target_amount=target_amount,
            target_date=target_date.date() if target_date else None,
            user_id=app.require_user_id(),
        )
    click.echo(f"Savings goal created: #{saved.id} {saved.title}")


@goal_group.command("deposit")
@click.argument("goal_id", type=int)
@click.argument("amount")
@click.pass_obj
def goal_deposit(app: AppContext, goal_id: int, amount: str) -> None:
    """Add money to a goal."""

    with _domain_errors():
        updated = savings.deposit(app.goal_repo, goal_id, amount, user_id=app.require_user_id())
    click.echo(f"Added {_money(app, to_money(amount))} to {updated.title}!")
    if updated.completed:
        click.echo("Goal completed!")


@goal_group.command("list")
@click.pass_obj
def goal_list(app: AppContext) -> None:
    """List goals with progress."""

    with _domain_errors():
        goals = savings.list_goals_with_progress(app.goal_repo, user_id=app.require_user_id())
    if not goals:
        click.echo("No savings goals yet")
    for progress in goals:
        goal = progress.goal
        done = "  ✓ Completed!" if goal.completed else ""
        click.echo(
            f"#{goal.id} {goal.title}: {_money(app, goal.current_amount)} of "
            f"{_money(app, goal.target_amount)}{done}"
        )
        line = f"    {_bar(progress.percentage)} {progress.percentage:.0f}% achieved"
        if goal.target_date:
            line += f"  Target: {goal.target_date.strftime('%b %d, %Y')}"
        click.echo(line)


@goal_group.command("delete")
@click.argument("goal_id", type=int)
@click.pass_obj
def goal_delete(app: AppContext, goal_id: int) -> None:
    """Delete a goal."""

    with _domain_errors():
        savings.delete_goal(app.goal_repo, goal_id, user_id=app.require_user_id())
    click.echo("Goal deleted")


def main() -> None:
    cli()


if __name__ == "__main__":  # pragma: no cover
    main()
