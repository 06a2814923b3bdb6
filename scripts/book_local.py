#!/usr/bin/env python3
"""
Interactive local booking harness (no HTTP, no browser).

Usage:
  python3 scripts/book_local.py [page-url]

What it does:
- Builds one BookingSession through the project wiring (mock backend unless SALON_API_BASE_URL is set)
- Lets you drive the three booking steps with short commands
- Prints the selection after every command, and whether slots came from the offline schedule
"""
from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from dotenv import load_dotenv

load_dotenv()

from salon_booking.application.use_cases.booking_session import BookingSession
from salon_booking.application.utils.localization import localized_text
from salon_booking.domain.entities.booking_selection import BookingStep, ContactDetails
from salon_booking.wiring.dependencies import build_booking_session


HELP = """Commands:
  groups                 -> list categories
  services [slug]        -> list services, optionally in one category
  category <slug>        -> select a category
  service <id>           -> select a service
  date YYYY-MM-DD        -> select a date
  slots                  -> load time slots for the selected date
  time HH:MM             -> select a time
  contact name|email|phone
  next / back / step <n> -> move between steps
  submit / cancel / help / quit"""


def _print_step_change(previous: BookingStep, current: BookingStep) -> None:
    print(f"(step {int(previous)} -> {int(current)})")


def _print_selection(session: BookingSession) -> None:
    sel = session.selection
    service = localized_text(sel.service.name, session.language) if sel.service else "-"
    print("\n--- Selection ---")
    print(f"step: {int(sel.step)} ({sel.step.name})")
    print(f"category: {sel.category or '-'}  service: {service}")
    print(f"date: {sel.date or '-'}  time: {sel.time or '-'}")
    print(f"contact: {sel.contact.name or '-'} / {sel.contact.email or '-'} / {sel.contact.phone or '-'}")
    print("-" * 60)


def _run(session: BookingSession, cmd: str, arg: str) -> None:
    if cmd == "groups":
        for group in session.service_groups():
            print(f"  {group.slug}: {localized_text(group.name, session.language)}")
        return
    if cmd == "services":
        for service in session.services_in_category(arg or None):
            name = localized_text(service.name, session.language)
            print(f"  [{service.id}] {name} ({service.duration} min, {service.price} EUR)")
        return
    if cmd == "slots":
        resolution = session.load_slots()
        if resolution is None:
            print("(slots discarded, selection changed)")
        elif resolution.is_empty:
            print("No time slots available for this day.")
        else:
            suffix = "  (offline schedule)" if resolution.degraded else ""
            print("  " + " ".join(resolution.slots) + suffix)
        return
    if cmd == "submit":
        result = session.submit()
        if result.ok:
            print(f"Booked! confirmation: {result.confirmation.confirmation_id}")
        else:
            print(f"Booking failed: {result.error}")
        return

    if cmd == "category":
        result = session.select_category(arg)
    elif cmd == "service":
        service = session.find_service(int(arg))
        if service is None:
            print("Unknown service id.")
            return
        result = session.select_service(service)
    elif cmd == "date":
        result = session.select_date(date.fromisoformat(arg))
    elif cmd == "time":
        result = session.select_time(arg)
    elif cmd == "contact":
        name, email, phone = (arg.split("|") + ["", "", ""])[:3]
        result = session.fill_contact(ContactDetails(name=name, email=email, phone=phone))
    elif cmd == "next":
        result = session.advance()
    elif cmd == "back":
        result = session.retreat()
    elif cmd == "step":
        result = session.jump_to(BookingStep(int(arg)))
    elif cmd == "cancel":
        result = session.cancel()
    else:
        print("Unknown command, try 'help'.")
        return

    if result.error is not None:
        print(f"Rejected: {result.error}")


def main() -> None:
    session = build_booking_session(on_step_change=_print_step_change)
    if len(sys.argv) > 1:
        outcome = session.seed_from_deep_link(sys.argv[1])
        if outcome.replace_url:
            print(f"(url replaced with {outcome.replace_url})")

    print("\nLocal Booking Harness")
    print("-" * 60)
    print(f"session_id: {session.session_id}")
    print(HELP)
    _print_selection(session)

    while True:
        try:
            line = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not line:
            continue
        cmd, _, arg = line.partition(" ")
        cmd = cmd.lower()
        if cmd in ("quit", "exit"):
            print("Bye!")
            return
        if cmd == "help":
            print(HELP)
            continue

        try:
            _run(session, cmd, arg.strip())
        except ValueError as e:
            print(f"Error: {e}")
            continue
        _print_selection(session)


if __name__ == "__main__":
    main()
