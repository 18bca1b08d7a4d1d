"""Infrastructure layer — read-only access to the driver and truck data.

This layer depends on stdlib and the config layer only.
It must never import from domain, services, commands, or output.
The service layer validates raw rows into domain records.
"""
