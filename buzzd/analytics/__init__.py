"""
In-process usage analytics: an append-only event log and its aggregates.
"""
