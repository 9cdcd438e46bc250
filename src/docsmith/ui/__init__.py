"""User interfaces for docsmith."""
