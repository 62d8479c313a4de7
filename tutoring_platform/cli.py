#!/usr/bin/env python3
"""
Command-line interface for the tutoring marketplace.

This CLI lets each role drive the assignment workflow:
- Students post assignments, review bids, accept one and approve the work
- Tutors browse open assignments, bid, and submit deliverables
- Admins list users and assignments and view platform analytics
"""

import argparse
import logging
import sys
from functools import wraps
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table

from .api.client import MarketplaceClient, build_client
from .config import PlatformConfig, load_config, save_config
from .errors import MarketplaceError
from .models.assignment import Assignment
from .models.user import UserRole
from .storage.json_store import JsonDataStore
from .storage.seed import seed_demo_data

console = Console(markup=False, highlight=False)


def get_client(args) -> MarketplaceClient:
    """Build a client from the configured data directory."""
    return build_client(load_config(args.config))


def require_login(func):
    """Decorator to require user login."""
    @wraps(func)
    def wrapper(args):
        client = get_client(args)
        if client.current_user is None:
            console.print("Error: Not logged in. Run 'tutoring login --email ...' first.")
            sys.exit(1)
        return func(client, args)
    return wrapper


def _money(amount: float) -> str:
    return f"${amount:,.2f}"


def _assignment_table(title: str, assignments: list[Assignment]) -> Table:
    table = Table(title=title)
    table.add_column("ID")
    table.add_column("Title")
    table.add_column("Subject")
    table.add_column("Student")
    table.add_column("Tutor")
    table.add_column("Budget", justify="right")
    table.add_column("Status")
    for a in assignments:
        table.add_row(
            a.id, a.title, a.subject, a.student_name, a.tutor_name or "-",
            _money(a.budget), a.status.value,
        )
    return table


# === Setup Commands ===

def cmd_init(args):
    """Create the data directory and default config."""
    config = load_config(args.config)
    config.data_dir.mkdir(parents=True, exist_ok=True)

    config_path = config.data_dir / "config.yaml"
    if not config_path.exists():
        save_config(config, config_path)
        console.print(f"Wrote {config_path}")

    if args.demo:
        inserted = seed_demo_data(JsonDataStore(config.data_dir))
        console.print(f"Loaded {inserted} demo records.")

    console.print(f"Data directory ready: {config.data_dir}")


# === Session Commands ===

def cmd_register(args):
    """Register a new account and log in."""
    client = get_client(args)
    user = client.register(args.name, args.email, args.password or "", UserRole(args.role))

    console.print("Registration successful!")
    console.print(f"User ID: {user.id}")
    console.print(f"Email: {user.email}")
    console.print(f"Role: {user.role.value}")


def cmd_login(args):
    """Login with existing account."""
    client = get_client(args)
    user = client.login(args.email, args.password or "")
    if user is None:
        console.print(f"Error: No user found with email '{args.email}'")
        sys.exit(1)
    console.print(f"Logged in as {user.name} ({user.role.value})")


def cmd_logout(args):
    get_client(args).logout()
    console.print("Logged out.")


@require_login
def cmd_whoami(client, args):
    user = client.current_user
    console.print(f"{user.name} <{user.email}> ({user.role.value}) id={user.id}")
    console.print("Operations: " + ", ".join(sorted(client.session.permitted_operations())))


def cmd_theme(args):
    """Show, set or toggle the display theme."""
    session = get_client(args).session
    if args.mode == "toggle":
        theme = session.toggle_theme()
    elif args.mode:
        theme = session.set_theme(args.mode)
    else:
        theme = session.theme
    console.print(f"Theme: {theme}")


# === Assignment Commands ===

@require_login
def cmd_assignments_list(client, args):
    """List assignments visible to your role."""
    assignments = client.get_assignments()
    if not assignments:
        console.print("No assignments found.")
        return
    console.print(_assignment_table("Assignments", assignments))


@require_login
def cmd_assignments_create(client, args):
    """Post a new assignment."""
    assignment = client.create_assignment(
        title=args.title,
        subject=args.subject,
        description=args.description or "",
        deadline=args.deadline,
        budget=args.budget,
        file_url=args.file,
    )
    console.print(f"Success: Assignment {assignment.id} is open for bids")


@require_login
def cmd_assignments_show(client, args):
    """Show assignment details."""
    a = client.get_assignment(args.assignment_id)

    console.print(f"\n{a.title} ({a.id})")
    console.print(f"Subject: {a.subject}")
    console.print(f"Status: {a.status.value}")
    console.print(f"Student: {a.student_name}")
    if a.tutor_name:
        console.print(f"Tutor: {a.tutor_name}")
    console.print(f"Budget: {_money(a.budget)}")
    console.print(f"Deadline: {a.deadline}")
    if a.file_url:
        console.print(f"Attachment: {a.file_url}")
    if a.submitted_file_url:
        console.print(f"Submitted work: {a.submitted_file_url}")
    console.print(f"\nDescription:\n{a.description}")


# === Bid Commands ===

@require_login
def cmd_bids_list(client, args):
    """List bids on an assignment, oldest first."""
    bids = client.get_bids_for_assignment(args.assignment_id)
    if not bids:
        console.print("No bids yet.")
        return

    table = Table(title=f"Bids for {args.assignment_id}")
    table.add_column("ID")
    table.add_column("Tutor")
    table.add_column("Amount", justify="right")
    table.add_column("Proposal")
    for b in bids:
        table.add_row(b.id, b.tutor_name, _money(b.amount), b.proposal)
    console.print(table)


@require_login
def cmd_bids_place(client, args):
    bid = client.create_bid(args.assignment_id, args.amount, args.proposal)
    console.print(f"Success: Bid {bid.id} placed for {_money(bid.amount)}")


@require_login
def cmd_bids_accept(client, args):
    assignment = client.accept_bid(args.assignment_id, args.bid_id)
    console.print(f"Success: {assignment.tutor_name} is now working on '{assignment.title}'")


# === Work Commands ===

@require_login
def cmd_work_submit(client, args):
    """Submit a deliverable for an assignment in progress."""
    assignment = client.submit_work(args.assignment_id, Path(args.file).name)
    console.print(f"Success: Work submitted for '{assignment.title}'")


@require_login
def cmd_work_list(client, args):
    work = client.get_tutor_assignments()
    console.print(_assignment_table("Active", work.active))
    console.print(_assignment_table("Completed", work.completed))


@require_login
def cmd_work_payments(client, args):
    """List payouts received."""
    payments = client.get_tutor_payments()
    if not payments:
        console.print("No payments yet.")
        return

    table = Table(title="Payments")
    table.add_column("ID")
    table.add_column("Assignment")
    table.add_column("Amount", justify="right")
    table.add_column("Fee", justify="right")
    table.add_column("Payout", justify="right")
    for p in payments:
        table.add_row(p.id, p.assignment_title, _money(p.amount),
                      _money(p.platform_fee), _money(p.payout))
    console.print(table)
    console.print(f"Total earned: {_money(sum(p.payout for p in payments))}")


@require_login
def cmd_complete(client, args):
    """Approve submitted work and release payment."""
    assignment = client.complete_assignment(args.assignment_id)
    console.print(f"Success: '{assignment.title}' completed and paid")


# === Admin Commands ===

@require_login
def cmd_admin_users(client, args):
    users = client.get_all_users()
    table = Table(title=f"Users ({len(users)})")
    table.add_column("ID")
    table.add_column("Name")
    table.add_column("Email")
    table.add_column("Role")
    for u in users:
        table.add_row(u.id, u.name, u.email, u.role.value)
    console.print(table)


@require_login
def cmd_admin_assignments(client, args):
    assignments = client.get_all_assignments()
    console.print(_assignment_table(f"Assignments ({len(assignments)})", assignments))


@require_login
def cmd_admin_analytics(client, args):
    """Show platform analytics."""
    data = client.get_platform_analytics()

    console.print("\n=== Platform Analytics ===\n")
    console.print(f"Total Volume: {_money(data.total_volume)}")
    console.print(f"Platform Revenue: {_money(data.platform_revenue)}")
    console.print(f"Total Users: {data.total_users} "
                  f"({data.student_count} Students / {data.tutor_count} Tutors)")
    console.print(f"Completed Jobs: {data.completed_jobs}")

    if data.recent_payments:
        table = Table(title="Recent Transactions")
        table.add_column("Assignment")
        table.add_column("Student")
        table.add_column("Tutor")
        table.add_column("Amount", justify="right")
        table.add_column("Fee", justify="right")
        for p in data.recent_payments:
            table.add_row(p.assignment_title, p.student_name, p.tutor_name,
                          _money(p.amount), _money(p.platform_fee))
        console.print(table)


# === Main CLI ===

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tutoring",
        description="Tutoring Marketplace CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Setup:        tutoring init --demo
  Login:        tutoring login --email student@test.com
  Post work:    tutoring assignments create --title "Essay" --subject History --deadline 2026-12-01 --budget 80
  Bid:          tutoring bids place ASG-ABC123 --amount 70 --proposal "I can help"
  Accept:       tutoring bids accept ASG-ABC123 BID-DEF456
  Submit:       tutoring work submit ASG-ABC123 --file essay.pdf
  Approve:      tutoring complete ASG-ABC123
        """
    )
    parser.add_argument("--config", type=Path, help="Path to config.yaml")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Init
    init_parser = subparsers.add_parser("init", help="Create data directory and config")
    init_parser.add_argument("--demo", action="store_true", help="Load demo data")
    init_parser.set_defaults(func=cmd_init)

    # Register
    register_parser = subparsers.add_parser("register", help="Register a new account")
    register_parser.add_argument("--name", required=True, help="Your full name")
    register_parser.add_argument("--email", required=True, help="Your email address")
    register_parser.add_argument("--password", help="Password (not verified)")
    register_parser.add_argument("--role", required=True, choices=[r.value for r in UserRole])
    register_parser.set_defaults(func=cmd_register)

    # Login / logout
    login_parser = subparsers.add_parser("login", help="Login to existing account")
    login_parser.add_argument("--email", required=True, help="Your email address")
    login_parser.add_argument("--password", help="Password (not verified)")
    login_parser.set_defaults(func=cmd_login)

    logout_parser = subparsers.add_parser("logout", help="End the session")
    logout_parser.set_defaults(func=cmd_logout)

    whoami_parser = subparsers.add_parser("whoami", help="Show the logged-in user")
    whoami_parser.set_defaults(func=cmd_whoami)

    theme_parser = subparsers.add_parser("theme", help="Show or change the display theme")
    theme_parser.add_argument("mode", nargs="?", choices=["light", "dark", "toggle"])
    theme_parser.set_defaults(func=cmd_theme)

    # Assignments
    assignments_parser = subparsers.add_parser("assignments", help="Assignment management")
    assignments_sub = assignments_parser.add_subparsers(dest="assignments_command")

    assignments_list = assignments_sub.add_parser("list", help="List assignments for your role")
    assignments_list.set_defaults(func=cmd_assignments_list)

    assignments_create = assignments_sub.add_parser("create", help="Post an assignment")
    assignments_create.add_argument("--title", required=True, help="Assignment title")
    assignments_create.add_argument("--subject", required=True, help="Subject area")
    assignments_create.add_argument("--description", help="What needs doing")
    assignments_create.add_argument("--deadline", required=True, help="Deadline (ISO date)")
    assignments_create.add_argument("--budget", type=float, required=True, help="Budget in USD")
    assignments_create.add_argument("--file", help="Attachment file name")
    assignments_create.set_defaults(func=cmd_assignments_create)

    assignments_show = assignments_sub.add_parser("show", help="Show assignment details")
    assignments_show.add_argument("assignment_id", help="Assignment ID")
    assignments_show.set_defaults(func=cmd_assignments_show)

    # Bids
    bids_parser = subparsers.add_parser("bids", help="Bidding")
    bids_sub = bids_parser.add_subparsers(dest="bids_command")

    bids_list = bids_sub.add_parser("list", help="List bids on an assignment")
    bids_list.add_argument("assignment_id", help="Assignment ID")
    bids_list.set_defaults(func=cmd_bids_list)

    bids_place = bids_sub.add_parser("place", help="Bid on an assignment")
    bids_place.add_argument("assignment_id", help="Assignment ID")
    bids_place.add_argument("--amount", type=float, required=True, help="Bid amount in USD")
    bids_place.add_argument("--proposal", required=True, help="Why you are the right tutor")
    bids_place.set_defaults(func=cmd_bids_place)

    bids_accept = bids_sub.add_parser("accept", help="Accept a bid")
    bids_accept.add_argument("assignment_id", help="Assignment ID")
    bids_accept.add_argument("bid_id", help="Bid ID")
    bids_accept.set_defaults(func=cmd_bids_accept)

    # Work
    work_parser = subparsers.add_parser("work", help="Tutor work")
    work_sub = work_parser.add_subparsers(dest="work_command")

    work_submit = work_sub.add_parser("submit", help="Submit a deliverable")
    work_submit.add_argument("assignment_id", help="Assignment ID")
    work_submit.add_argument("--file", required=True, help="Deliverable file")
    work_submit.set_defaults(func=cmd_work_submit)

    work_list = work_sub.add_parser("list", help="List your active and completed work")
    work_list.set_defaults(func=cmd_work_list)

    work_payments = work_sub.add_parser("payments", help="List your payouts")
    work_payments.set_defaults(func=cmd_work_payments)

    # Complete
    complete_parser = subparsers.add_parser("complete", help="Approve work and pay the tutor")
    complete_parser.add_argument("assignment_id", help="Assignment ID")
    complete_parser.set_defaults(func=cmd_complete)

    # Admin
    admin_parser = subparsers.add_parser("admin", help="Admin commands")
    admin_sub = admin_parser.add_subparsers(dest="admin_command")

    admin_users = admin_sub.add_parser("users", help="List all users")
    admin_users.set_defaults(func=cmd_admin_users)

    admin_assignments = admin_sub.add_parser("assignments", help="List all assignments")
    admin_assignments.set_defaults(func=cmd_admin_assignments)

    admin_analytics = admin_sub.add_parser("analytics", help="Show platform analytics")
    admin_analytics.set_defaults(func=cmd_admin_analytics)

    return parser


def configure_logging(verbose: bool, config: Optional[PlatformConfig] = None) -> None:
    level = logging.DEBUG if verbose else getattr(
        logging, (config.log_level if config else "WARNING").upper(), logging.WARNING
    )
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        configure_logging(args.verbose, load_config(args.config))
        args.func(args)
    except MarketplaceError as e:
        console.print(f"Error: {e}")
        return 1
    except FileNotFoundError as e:
        console.print(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
