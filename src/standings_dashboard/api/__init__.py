"""HTTP query surface for the dashboard front end."""
