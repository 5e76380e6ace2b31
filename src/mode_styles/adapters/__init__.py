"""Host adapters built on top of the resolution core."""
