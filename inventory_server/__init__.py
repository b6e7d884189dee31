"""GCP Resource Inventory Server.

Aggregates Compute Engine instances and persistent disks from every zone of
a project into one flattened, filterable HTTP listing.
"""

__version__ = "0.1.0"
