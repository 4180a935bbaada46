"""Adapters layer - Concrete implementations of the ports.

- cache: InMemoryCache, NullCache
- geocoding: GoogleGeocoderAdapter, NominatimGeocoderAdapter
- forms: SchemaFieldResolver, MappingRecord, DictFormState
"""
