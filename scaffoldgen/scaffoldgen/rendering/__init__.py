"""Template evaluation and output file writing."""
