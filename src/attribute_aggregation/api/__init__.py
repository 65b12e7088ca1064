"""HTTP API for attribute aggregation."""
