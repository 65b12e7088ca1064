"""attribute-aggregation: enrich user attributes from external attribute authorities."""

__version__ = "0.1.0"
