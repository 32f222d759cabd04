"""HTTP API for Postboard."""
