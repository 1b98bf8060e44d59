"""
High-level use cases for the Castle Clothing API.

Each service orchestrates the repository and the external adapters (image
host, mailer). Routers call these services and only translate the outcome
into HTTP responses.
"""
