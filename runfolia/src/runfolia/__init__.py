"""Download, stage and launch a Folia server for local plugin testing."""

__version__ = "0.1.0"
