"""API route modules.

- aggregate: Attribute aggregation
- health: Service status
"""

from . import aggregate, health

__all__ = ["aggregate", "health"]
