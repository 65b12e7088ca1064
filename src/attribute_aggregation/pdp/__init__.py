"""Policy Decision Point (PDP) - Attribute Release Policy evaluation.

The PDP is stateless and side-effect free. It answers two questions for the
orchestrator and the aggregators:

- Is an authority eligible, given the running attribute set?
- Which original values must an authority preserve under the ARP?

Structure:
    arp.py - ARP evaluation helpers
"""

from attribute_aggregation.pdp.arp import (
    fallback_names,
    first_value,
    has_required_inputs,
    is_sanctioned_source,
    preserve_fallback_attributes,
)

__all__ = [
    "fallback_names",
    "first_value",
    "has_required_inputs",
    "is_sanctioned_source",
    "preserve_fallback_attributes",
]
