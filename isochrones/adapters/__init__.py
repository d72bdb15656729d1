"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the request layer to isochrone computation engines.
"""
