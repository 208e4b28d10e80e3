#!/usr/bin/env python3
"""Event Contacts CLI."""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from dotenv import load_dotenv

from event_contacts.config import ConfigError, Settings, load_settings
from event_contacts.contacts import ContactStore, ContactValidationError
from event_contacts.screen import SCREEN_TITLE, ContactScreen, format_contact_rows
from event_contacts.storage import build_storage


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="event-contacts",
        description="Keep track of the people you meet at networking events.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser(
        "list",
        help="List saved contacts in the order they were added.",
    )

    add_parser = subparsers.add_parser(
        "add",
        help="Add a contact. A name is required.",
    )
    add_parser.add_argument("--name", default="", help="Contact name (required).")
    add_parser.add_argument("--email", default="", help="Email address.")
    add_parser.add_argument("--phone", default="", help="Phone number.")
    add_parser.add_argument("--notes", default="", help="Free-form notes.")
    add_parser.add_argument(
        "--qr",
        default="",
        help="Payload of a scanned QR code to keep with the contact.",
    )

    delete_parser = subparsers.add_parser(
        "delete",
        help="Delete a contact by ID.",
    )
    delete_parser.add_argument("contact_id", help="ID shown by the list command.")

    subparsers.add_parser(
        "check-storage",
        help="Show which storage backend is configured and how many contacts it holds.",
    )

    return parser


async def _open_screen(settings: Settings) -> ContactScreen:
    store = ContactStore(build_storage(settings), key=settings.contacts_key)
    screen = ContactScreen(store)
    await screen.start()
    return screen


async def _cmd_list(settings: Settings) -> int:
    screen = await _open_screen(settings)
    contacts = screen.store.list()
    if not contacts:
        print("No contacts yet.")
        return 0

    print(SCREEN_TITLE)
    print()
    print(format_contact_rows(contacts))
    return 0


async def _cmd_add(
    settings: Settings,
    *,
    name: str,
    email: str,
    phone: str,
    notes: str,
    qr_code: str,
) -> int:
    screen = await _open_screen(settings)
    screen.update_form(name=name, email=email, phone=phone, notes=notes, qr_code=qr_code)
    try:
        contact = screen.submit()
    except ContactValidationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    await screen.store.flush()
    print(f"Added {contact.name} ({contact.id})")
    return 0


async def _cmd_delete(settings: Settings, contact_id: str) -> int:
    screen = await _open_screen(settings)
    deleted = screen.delete(contact_id)
    await screen.store.flush()
    if not deleted:
        print(f"Contact {contact_id} not found; nothing deleted.")
        return 0
    print(f"Deleted {contact_id}")
    return 0


async def _cmd_check_storage(settings: Settings) -> int:
    screen = await _open_screen(settings)
    print(
        "Storage:",
        screen.store.storage.name,
        "| Key:",
        settings.contacts_key,
        "| Contacts:",
        len(screen.store),
        "| Environment:",
        settings.environment,
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "list":
        return asyncio.run(_cmd_list(settings))
    if args.command == "add":
        return asyncio.run(
            _cmd_add(
                settings,
                name=args.name,
                email=args.email,
                phone=args.phone,
                notes=args.notes,
                qr_code=args.qr,
            )
        )
    if args.command == "delete":
        return asyncio.run(_cmd_delete(settings, args.contact_id))
    if args.command == "check-storage":
        return asyncio.run(_cmd_check_storage(settings))

    parser.error(f"Unknown command: {args.command}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
