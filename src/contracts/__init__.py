"""Shared protocol and command contracts for UI and notification transports."""
