"""HTTP routes of the portfolio API."""
