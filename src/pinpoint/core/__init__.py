"""Core resolution engine: version types, catalogs, release trains and the resolver."""
