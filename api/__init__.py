"""HTTP interface for the Event Contacts screen."""
