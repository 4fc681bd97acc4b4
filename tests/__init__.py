"""Tests for the evohome_zone controller."""
