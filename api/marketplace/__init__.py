"""Resale marketplace listing API."""
