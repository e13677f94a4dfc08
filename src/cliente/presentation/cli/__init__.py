"""Cliente command-line interface."""
