"""Unit tests for the page-element framework and report tooling."""
