class EventTargetError(Exception):
    """Base error for event_target exceptions."""


class SettingsError(EventTargetError):
    """Raised when settings cannot be read or contain invalid values."""
