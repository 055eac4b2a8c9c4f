"""Per-range counting and result consolidation."""
