#!/usr/bin/env python3
"""
Entry point for the flight search API server
"""

from flight_search.main import main

if __name__ == "__main__":
    main()
