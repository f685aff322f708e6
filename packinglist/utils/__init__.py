"""Utility modules for the packing list model."""
