"""Appointment scheduling and conflict-resolution core for barbershops."""

__version__ = "0.1.0"
