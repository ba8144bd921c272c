"""In-process pick log and the summary statistics derived from it."""
