"""CLI for timewise - booking spreadsheet and calendar operations.

Usage:
    timewise status                              # Show configuration status
    timewise test                                # Test service account credentials
    timewise bookings month 2026 1               # Bookings per day in a month
    timewise bookings day 2026-01-25             # Bookings per slot on a day
    timewise bookings add --name ... --date ...  # Append a booking row
    timewise settings show                       # Show scheduler settings
    timewise settings set --weekdays 1,2,3       # Update scheduler settings
    timewise event create --name ... --start ... # Create a booking event
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime


def _print_json(data) -> None:
    print(json.dumps(data, indent=2, sort_keys=True))


def _load_config():
    from timewise.config import SchedulerConfig

    return SchedulerConfig.from_env()


def _split_arg(value: str | None) -> list[str] | None:
    if value is None:
        return None
    return [part.strip() for part in value.split(",") if part.strip()]


def cmd_status() -> int:
    """Show status of the scheduler configuration."""
    from timewise.config import REPO_ROOT, get_config_status

    status = get_config_status(_load_config())

    print("=" * 60)
    print("TIMEWISE CONFIGURATION STATUS")
    print("=" * 60)
    print()
    print(f"Repository: {REPO_ROOT}")
    print(f".env file:  {'[x]' if status['env_file'] else '[ ]'}")
    print()

    google = status["google"]
    print("Google Service Account:")
    print(f"  email:       {google['service_account_email'] or '[ ]'}")
    print(f"  private key: {'[x]' if google['private_key'] else '[ ]'}")
    print()

    sheets = status["sheets"]
    print("Sheets:")
    print(f"  sheet id:       {'[x]' if sheets['sheet_id'] else '[ ]'}")
    print(f"  bookings tab:   {sheets['bookings_sheet']}")
    print(f"  settings tab:   {sheets['settings_sheet']}")
    print()

    calendar = status["calendar"]
    print("Calendar:")
    print(f"  calendar id:  {'[x]' if calendar['calendar_id'] else '[ ]'}")
    print(f"  meet link:    {'[x]' if calendar['meet_link'] else '[ ]'}")
    print(f"  event title:  {calendar['event_title']}")
    print()

    return 0


def cmd_test() -> int:
    """Test the configured service account."""
    from timewise.google import GoogleAuthError, GoogleServiceAccount

    config = _load_config()
    if not config.has_credentials:
        print("  [ ] service account not configured")
        return 1

    try:
        auth = GoogleServiceAccount(config.service_account_email, config.private_key)
    except GoogleAuthError as e:
        print(f"  [✗] {e}")
        return 1

    print(f"  [✓] {auth.email}")
    print(f"      scopes: {', '.join(auth.scopes)}")
    return 0


def bookings_month(year: int, month: int) -> int:
    """Print booking counts per day for a month."""
    from timewise.sheets import SchedulerStore

    store = SchedulerStore.from_config(_load_config())
    _print_json(store.get_booking_counts_for_month(year, month))
    return 0


def bookings_day(date: str) -> int:
    """Print booking counts per time slot for a day."""
    from timewise.sheets import SchedulerStore

    store = SchedulerStore.from_config(_load_config())
    _print_json(store.get_booked_time_slots_for_day(date))
    return 0


def bookings_add(args: argparse.Namespace) -> int:
    """Append a booking row."""
    from timewise.sheets import BookingRecord, SchedulerStore, SheetsError

    store = SchedulerStore.from_config(_load_config())
    booking = BookingRecord(
        name=args.name,
        email=args.email,
        phone_number=args.phone,
        whatsapp_number=args.whatsapp or args.phone,
        booking_date=args.date,
        booking_time=args.time,
    )

    try:
        store.append_booking(booking)
    except SheetsError as e:
        print(f"Error: {e}")
        return 1

    print(f"Booking saved: {booking.name} on {booking.booking_date} at {booking.booking_time}")
    return 0


def settings_show() -> int:
    """Print scheduler settings."""
    from timewise.sheets import SchedulerStore

    store = SchedulerStore.from_config(_load_config())
    _print_json(store.get_scheduler_settings().to_dict())
    return 0


def settings_set(weekdays: str | None, disabled_dates: str | None, time_slots: str | None) -> int:
    """Merge the given values over the current settings and save them."""
    from timewise.sheets import SchedulerStore, SheetsError

    store = SchedulerStore.from_config(_load_config())
    try:
        settings = store.read_scheduler_settings()
    except SheetsError as e:
        print(f"Error: {e}")
        return 1

    try:
        if weekdays is not None:
            settings.available_weekdays = [int(day) for day in _split_arg(weekdays)]
    except ValueError:
        print(f"Error: weekdays must be comma-separated integers, got {weekdays!r}")
        return 1
    if disabled_dates is not None:
        settings.disabled_dates = _split_arg(disabled_dates)
    if time_slots is not None:
        settings.available_time_slots = _split_arg(time_slots)

    try:
        store.update_scheduler_settings(settings)
    except SheetsError as e:
        print(f"Error: {e}")
        return 1

    _print_json(settings.to_dict())
    return 0


def event_create(name: str, email: str, start: str) -> int:
    """Create a booking calendar event."""
    from timewise.calendar import BookingCalendar, CalendarError

    try:
        start_dt = datetime.fromisoformat(start.replace("Z", "+00:00"))
    except ValueError:
        print(f"Error: --start must be an ISO 8601 datetime, got {start!r}")
        return 1

    calendar = BookingCalendar.from_config(_load_config())
    try:
        result = calendar.create_booking_event(name, email, start_dt)
    except CalendarError as e:
        print(f"Error: {e}")
        return 1

    print(f"Event link   : {result.html_link or 'not created'}")
    print(f"Meeting link : {result.hangout_link or 'not configured'}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="timewise",
        description="Booking spreadsheet and calendar operations for the scheduler",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show info-level logs")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    # status command
    subparsers.add_parser("status", help="Show configuration status")

    # test command
    subparsers.add_parser("test", help="Test service account credentials")

    # bookings subcommand
    bookings_parser = subparsers.add_parser("bookings", help="Booking rows")
    bookings_subparsers = bookings_parser.add_subparsers(dest="bookings_command", help="Command")

    month_parser = bookings_subparsers.add_parser("month", help="Bookings per day in a month")
    month_parser.add_argument("year", type=int, help="Year (e.g., 2026)")
    month_parser.add_argument("month", type=int, choices=range(1, 13), help="Month (1-12)")

    day_parser = bookings_subparsers.add_parser("day", help="Bookings per time slot on a day")
    day_parser.add_argument("date", help="Date as stored in the sheet (e.g., 2026-01-25)")

    add_parser = bookings_subparsers.add_parser("add", help="Append a booking row")
    add_parser.add_argument("--name", required=True)
    add_parser.add_argument("--email", required=True)
    add_parser.add_argument("--phone", required=True)
    add_parser.add_argument("--whatsapp", help="WhatsApp number (default: --phone)")
    add_parser.add_argument("--date", required=True, help="Booking date (e.g., 2026-01-25)")
    add_parser.add_argument("--time", required=True, help="Booking time (e.g., 10:00 AM)")

    # settings subcommand
    settings_parser = subparsers.add_parser("settings", help="Scheduler settings")
    settings_subparsers = settings_parser.add_subparsers(dest="settings_command", help="Command")

    settings_subparsers.add_parser("show", help="Show scheduler settings")

    set_parser = settings_subparsers.add_parser("set", help="Update scheduler settings")
    set_parser.add_argument("--weekdays", help="Comma-separated weekdays, 0=Sunday (e.g., 1,2,3,4,5)")
    set_parser.add_argument("--disabled-dates", help="Comma-separated dates (empty string clears)")
    set_parser.add_argument("--time-slots", help="Comma-separated time slots")

    # event subcommand
    event_parser = subparsers.add_parser("event", help="Calendar events")
    event_subparsers = event_parser.add_subparsers(dest="event_command", help="Command")

    create_parser = event_subparsers.add_parser("create", help="Create a booking event")
    create_parser.add_argument("--name", required=True)
    create_parser.add_argument("--email", required=True)
    create_parser.add_argument("--start", required=True, help="ISO 8601 start (naive = UTC)")

    args = parser.parse_args(argv if argv is not None else sys.argv[1:])

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "status":
        return cmd_status()

    if args.command == "test":
        return cmd_test()

    if args.command == "bookings":
        if args.bookings_command == "month":
            return bookings_month(args.year, args.month)
        elif args.bookings_command == "day":
            return bookings_day(args.date)
        elif args.bookings_command == "add":
            return bookings_add(args)
        else:
            bookings_parser.print_help()
            return 0

    if args.command == "settings":
        if args.settings_command == "show":
            return settings_show()
        elif args.settings_command == "set":
            return settings_set(args.weekdays, args.disabled_dates, args.time_slots)
        else:
            settings_parser.print_help()
            return 0

    if args.command == "event":
        if args.event_command == "create":
            return event_create(args.name, args.email, args.start)
        else:
            event_parser.print_help()
            return 0

    return 0


if __name__ == "__main__":
    sys.exit(main())
