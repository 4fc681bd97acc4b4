"""Home Assistant custom components."""
