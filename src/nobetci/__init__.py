"""On-duty pharmacy lookup service."""
