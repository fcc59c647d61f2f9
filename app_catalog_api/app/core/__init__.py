"""Configuration, logging, error types and document store backends."""
