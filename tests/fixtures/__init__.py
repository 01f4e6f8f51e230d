"""Sample documents shared by unit and integration tests."""
