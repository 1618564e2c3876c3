"""doclens command line interface."""
