"""
Price history helpers and external data providers.
"""
