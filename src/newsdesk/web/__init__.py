"""HTTP surface for newsdesk."""
