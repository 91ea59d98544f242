"""Properties app package.

This app encapsulates property listings and their rooms, including each
room's availability window, and the directory the booking lifecycle uses
to resolve rooms and their owners.
"""
