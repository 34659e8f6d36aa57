"""HTTP surface for sandbox filesystem operations."""
