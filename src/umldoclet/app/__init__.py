"""Application layer: command line, configuration resolution and run orchestration."""
