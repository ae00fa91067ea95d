"""SURL: a counter-based URL shortener."""
