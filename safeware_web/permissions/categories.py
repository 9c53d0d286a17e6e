# Overview: Capability category constants for grouping related capabilities.


class CapabilityCategory:
    """Capability categories for organization and navigation display."""
    INVENTORY = "INVENTORY"
    WAREHOUSES = "WAREHOUSES"
    PEOPLE = "PEOPLE"
    AUDIT = "AUDIT"
    GENERAL = "GENERAL"
