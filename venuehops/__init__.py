"""venuehops -- travel difficulty from attendee home cities to candidate venues."""

__version__ = "0.1.0"
