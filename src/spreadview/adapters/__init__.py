"""Host adapters for the viewer core."""
