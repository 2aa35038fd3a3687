"""TAP version 14 producer toolkit."""
