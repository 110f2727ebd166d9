"""
Offline console demo: lists slots and books appointments without any backend.

Runs the real scheduling core (slot generation, conflict checks, the
locked booking transaction) against the in-memory document store seeded
with one demo barbershop. No network, no credentials.

Usage:
    python console_demo.py
    python console_demo.py --scenario booking
    python console_demo.py --scenario race
"""

import argparse
import asyncio
from datetime import date, datetime, timedelta

from barber_booking.config import settings
from barber_booking.context import SchedulingContext, StaticIdentity
from barber_booking.errors import ConflictError, SchedulingError
from barber_booking.scheduling.service import SchedulingService
from barber_booking.schemas.availability_schema import AvailabilitySpec, DaySchedule, Weekday
from barber_booking.schemas.booking_schema import CandidateSlot, ClientInfo
from barber_booking.store.base import join_path
from barber_booking.store.memory import InMemoryDocumentStore
from barber_booking.store.repository import SERVICES_COLLECTION, profile_path
from barber_booking.utils import parse_clock

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"

DEMO_PROVIDER = "barbearia-demo"
DEMO_SERVICE = "corte"
RACE_ATTEMPTS = 5


def _demo_availability() -> AvailabilitySpec:
    weekday_hours = DaySchedule(active=True, open_time=parse_clock("09:00"), close_time=parse_clock("18:00"))
    return AvailabilitySpec(
        slot_interval_minutes=30,
        weekdays={
            **{day: weekday_hours for day in (
                Weekday.TUESDAY, Weekday.WEDNESDAY, Weekday.THURSDAY, Weekday.FRIDAY,
            )},
            Weekday.SATURDAY: DaySchedule(
                active=True, open_time=parse_clock("08:00"), close_time=parse_clock("13:00")
            ),
        },
    )


def _next_open_day(spec: AvailabilitySpec) -> date:
    day = date.today() + timedelta(days=1)
    while not spec.day(Weekday(day.weekday())).active:
        day += timedelta(days=1)
    return day


class ConsoleSession:
    """Drives the scheduling service from the terminal."""

    def __init__(self) -> None:
        self.store = InMemoryDocumentStore()
        self.context = SchedulingContext(store=self.store)
        self.service = SchedulingService(self.context)

    def say(self, text: str) -> None:
        print(f"{GREEN}{text}{RESET}")

    def system_log(self, text: str) -> None:
        print(f"{DIM}  >> {text}{RESET}")

    async def seed(self) -> None:
        await self.store.write_document(
            profile_path(DEMO_PROVIDER), {"nome": "Barbearia Demo", "plan": "free"}
        )
        await self.store.write_document(
            join_path(SERVICES_COLLECTION, DEMO_SERVICE),
            {"barbeiroId": DEMO_PROVIDER, "nome": "Corte de cabelo", "duracao": 30, "valor": 45.0},
        )
        await self.store.write_document(
            join_path(SERVICES_COLLECTION, "barba"),
            {"barbeiroId": DEMO_PROVIDER, "nome": "Barba", "duracao": 45, "valor": 35.0},
        )
        await self.service.save_availability(DEMO_PROVIDER, _demo_availability())
        self.system_log(f"Seeded provider '{DEMO_PROVIDER}' ({settings.scheduling.timezone})")

    def _print_slots(self, slots: list[CandidateSlot]) -> None:
        if not slots:
            print(f"{RED}  No free slots.{RESET}")
            return
        print("  " + "  ".join(
            f"{BLUE}[{i}]{RESET} {slot.start:%H:%M}" for i, slot in enumerate(slots)
        ))

    # ------------------------------------------------------------------ #
    # Scenarios
    # ------------------------------------------------------------------ #

    async def scenario_booking(self) -> None:
        spec = await self.service.get_availability(DEMO_PROVIDER)
        day = _next_open_day(spec)
        self.say(f"Free slots for {day:%A %Y-%m-%d}:")
        slots = await self.service.list_available_slots(DEMO_PROVIDER, day, DEMO_SERVICE)
        self._print_slots(slots)

        chosen = slots[2]
        booking = await self.service.book(
            DEMO_PROVIDER, DEMO_SERVICE, chosen.start, ClientInfo(name="Ana Souza", phone="(11) 98765-4321")
        )
        self.say(f"Booked {booking.service_name} at {booking.start:%H:%M} for {booking.client_name} ({booking.id})")

        self.say("Free slots after booking:")
        self._print_slots(await self.service.list_available_slots(DEMO_PROVIDER, day, DEMO_SERVICE))

        try:
            await self.service.book(DEMO_PROVIDER, DEMO_SERVICE, chosen.start, ClientInfo(name="Bruno"))
        except ConflictError as exc:
            print(f"{YELLOW}Second booking for {chosen.start:%H:%M} rejected: {exc}{RESET}")

    async def scenario_race(self) -> None:
        spec = await self.service.get_availability(DEMO_PROVIDER)
        day = _next_open_day(spec)
        slots = await self.service.list_available_slots(DEMO_PROVIDER, day, DEMO_SERVICE)
        target = slots[0]
        self.say(f"{RACE_ATTEMPTS} clients try {target.start:%Y-%m-%d %H:%M} at the same time")

        async def attempt(n: int):
            ctx = self.context.with_identity(StaticIdentity(f"client-{n}"))
            return await SchedulingService(ctx).book(
                DEMO_PROVIDER, DEMO_SERVICE, target.start, ClientInfo(name=f"Client {n}"),
                request_id=f"REQ-race-{n}",
            )

        results = await asyncio.gather(
            *(attempt(n) for n in range(RACE_ATTEMPTS)), return_exceptions=True
        )
        for n, result in enumerate(results):
            if isinstance(result, ConflictError):
                print(f"  client-{n}: {RED}conflict{RESET}")
            elif isinstance(result, Exception):
                print(f"  client-{n}: {RED}{result!r}{RESET}")
            else:
                print(f"  client-{n}: {GREEN}booked {result.id}{RESET}")

        agenda = await self.service.bookings_for_day(DEMO_PROVIDER, day)
        self.system_log(f"Agenda for {day}: {len(agenda)} booking(s)")

    SCENARIOS = {"booking": scenario_booking, "race": scenario_race}

    async def run_scenario(self, scenario: str) -> None:
        handler = self.SCENARIOS.get(scenario)
        if handler is None:
            print(f"{RED}Unknown scenario: {scenario}{RESET}")
            return
        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  BARBER BOOKING - Scenario: {scenario}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")
        await self.seed()
        await handler(self)
        print(f"{BOLD}{'=' * 60}{RESET}")

    async def run(self) -> None:
        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  BARBER BOOKING - Console Demo{RESET}")
        print(f"{BOLD}  Type 'quit' to exit{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")
        await self.seed()

        while True:
            raw = input(f"\n{BLUE}Date (YYYY-MM-DD) {RESET}").strip()
            if raw.lower() in ("quit", "exit", "q"):
                print(f"\n{DIM}Session ended.{RESET}")
                return
            try:
                day = datetime.strptime(raw, "%Y-%m-%d").date()
            except ValueError:
                print(f"{RED}Use the YYYY-MM-DD format.{RESET}")
                continue

            slots = await self.service.list_available_slots(DEMO_PROVIDER, day, DEMO_SERVICE)
            self._print_slots(slots)
            if not slots:
                continue

            choice = input(f"{BLUE}Slot number {RESET}").strip()
            if not choice.isdigit() or int(choice) >= len(slots):
                print(f"{RED}Pick one of the listed numbers.{RESET}")
                continue
            name = input(f"{BLUE}Your name {RESET}").strip()
            try:
                booking = await self.service.book(
                    DEMO_PROVIDER, DEMO_SERVICE, slots[int(choice)].start, ClientInfo(name=name)
                )
            except SchedulingError as exc:
                print(f"{RED}Booking failed: {exc}{RESET}")
                continue
            self.say(f"Booked {booking.start:%Y-%m-%d %H:%M} for {booking.client_name}.")


def main() -> None:
    parser = argparse.ArgumentParser(description="Offline console demo")
    parser.add_argument(
        "--scenario",
        choices=sorted(ConsoleSession.SCENARIOS),
        default=None,
        help="Auto-play a pre-scripted scenario instead of interactive mode",
    )
    args = parser.parse_args()

    session = ConsoleSession()
    if args.scenario:
        asyncio.run(session.run_scenario(args.scenario))
    else:
        asyncio.run(session.run())


if __name__ == "__main__":
    main()
