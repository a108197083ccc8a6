"""Host adapters for concrete editor widgets."""
