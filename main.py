"""
Barber booking entry point.

Usage:
    Interactive console:  python main.py console
    Scripted scenario:    python main.py booking | race
"""

import asyncio
import logging
import sys

from barber_booking.config import settings

logger = logging.getLogger(__name__)


def _run_console_mode(scenario: str) -> None:
    """Start the offline console demo (in-memory store, no credentials)."""
    from console_demo import ConsoleSession

    session = ConsoleSession()
    logger.info("Starting %s console (%s)", settings.app_name, scenario)
    if scenario == "console":
        asyncio.run(session.run())
    else:
        asyncio.run(session.run_scenario(scenario))


if __name__ == "__main__":
    _run_console_mode(sys.argv[1] if len(sys.argv) > 1 else "console")
