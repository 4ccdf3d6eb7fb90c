from .event_log import EventLog, read_events
