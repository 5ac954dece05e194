"""Domain models and exceptions for vendortrace."""
