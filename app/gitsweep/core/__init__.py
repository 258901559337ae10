"""Core configuration, paths and theming for gitsweep."""
