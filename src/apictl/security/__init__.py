"""Secret encryption for externally deployed configuration."""
