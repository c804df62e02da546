"""
Flight Search Service

Flight and airport search backed by the Amadeus self-service API, with a
shared OAuth2 credential cache on the server side and a debounced,
race-safe autocomplete coordinator for clients.
"""

__version__ = "1.0.0"
__author__ = "Flight Search Team"
