"""SMATE Clock package.

Organized by feature modules (users, locations, clock, reports) with a thin
Flask controller layer over service/repository layers.
"""
