"""HTTP surface: console screens and the v1 JSON API."""
