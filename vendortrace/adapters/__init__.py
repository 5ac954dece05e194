"""Adapters implementing the vendortrace ports."""
