"""Command line wallet panel."""
