"""
Core infrastructure: settings, logging, errors, clock and storage backends.
"""
