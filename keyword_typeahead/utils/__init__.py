"""Config, logging and metrics helpers."""
