"""Top-level package for Django configuration.

This package exposes the settings modules of the Student Rentals project
for the different environments.
"""
