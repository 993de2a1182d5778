"""Remote astronomy portal: catalog visibility, weather proxy and a simulated telescope."""

__version__ = "0.1.0"
