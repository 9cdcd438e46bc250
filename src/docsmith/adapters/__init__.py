"""Adapters connecting docsmith to Markdown, example extraction, and test execution."""
