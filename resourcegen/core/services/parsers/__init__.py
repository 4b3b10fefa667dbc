"""Parsers for the TypeScript subset found in resource declarations."""
