"""windowstats – in-process monitoring helpers."""
