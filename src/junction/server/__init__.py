"""Server pipeline: dispatch, error mapping, negotiation, and sending."""
