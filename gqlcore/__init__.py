"""GraphQL type system model, validation checks, introspection views, scalars and Relay IDs."""

__version__ = "0.1.0"