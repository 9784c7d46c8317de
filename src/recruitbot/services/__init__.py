"""Ticket workflow services: channel creation helpers and the close timer."""
