"""
Mapping provider integration.

Responsibilities:
- Hold provider configuration and credentials.
- Define the place / building / location models shared by the engine.
- Talk to the Google Maps web services over httpx (nearby search, text
  search, walking directions, reverse geocoding).
"""
