"""Calendar-read provider implementations, loaded lazily by ``get_calendar_provider``."""
