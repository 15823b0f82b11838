"""Desktop host and CLI for the animated ZEEKR logo."""
