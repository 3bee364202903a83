"""Core devlog processing for Devstry."""
