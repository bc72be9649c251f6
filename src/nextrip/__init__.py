"""Countdown to the next Metro Transit bus via the NexTrip API."""

__version__ = "0.1.0"
