"""A web shop for vinyl records, with accounts, a catalogue and a session cart."""

__version__ = "0.1.0"