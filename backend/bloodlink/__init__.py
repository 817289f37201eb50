"""BloodLink API: donor registrations, blood requests and contact messages."""

__version__ = "1.0.0"
