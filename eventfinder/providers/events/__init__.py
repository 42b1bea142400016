from eventfinder.providers.events.csv_event_source import CSVEventSource, row_to_event

__all__ = ["CSVEventSource", "row_to_event"]
