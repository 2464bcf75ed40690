"""dbdock command line interface."""
