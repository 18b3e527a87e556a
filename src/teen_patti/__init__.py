"""Teen Patti Table - a three-seat Teen Patti engine with an LLM dealer."""

__version__ = "0.1.0"
