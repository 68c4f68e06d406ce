"""Settings, logging and exceptions."""
