"""Command line interface for form scanning and filling."""
