"""Luxury vehicle rental booking API."""
