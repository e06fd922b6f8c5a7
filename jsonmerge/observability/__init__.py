"""
Logging and metrics for merge runs.
"""
