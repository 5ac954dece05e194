"""Vendortrace - reconcile vendored source trees with their upstream history."""
