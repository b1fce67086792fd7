"""TripScout: LLM-generated travel plans enriched with Google Maps data."""

__version__ = "0.1.0"
