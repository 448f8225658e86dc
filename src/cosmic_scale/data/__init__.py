"""Static body catalog."""
