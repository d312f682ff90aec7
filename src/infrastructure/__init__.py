"""
infrastructure - Concrete implementations of domain ports.

Contains all vendor-specific code: requests, pydantic wire schemas, the
token file, dotenv-backed settings. Depends on domain/ only (implements
ports). Never imported by application/.
"""
