"""windowstats – shared configuration, logging and HTTP helpers."""
