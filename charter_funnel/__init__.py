"""Top-level package for the charter lead-generation funnel.

This package exposes the core used by the booking front-end: airport
resolution against external directories, relevance ranking of the
resolved candidates, flight-time estimation and the booking wizard
state machine that ties them together.
"""
