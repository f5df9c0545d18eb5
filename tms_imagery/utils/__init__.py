"""Shared helpers.

- events: Synchronous event channel and the provider error payload
"""
