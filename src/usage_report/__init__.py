"""Usage report: aggregate local Claude usage stats into report artifacts."""

__version__ = "0.1.0"
