"""Concrete adapters for the interfaces in :mod:`lyrlib.interfaces`."""
