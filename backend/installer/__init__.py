"""Operator validation and requirement aggregation for cluster installation."""
