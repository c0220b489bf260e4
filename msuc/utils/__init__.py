"""Helpers shared by the catalog scrapers."""
