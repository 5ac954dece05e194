"""Core business logic for vendortrace."""
