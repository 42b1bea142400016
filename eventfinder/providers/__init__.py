"""Concrete adapters behind the interfaces in :mod:`eventfinder.interfaces`."""
