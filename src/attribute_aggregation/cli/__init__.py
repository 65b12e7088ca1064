"""Command line interface for attribute-aggregation."""
