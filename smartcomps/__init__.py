"""SmartComps - compensation comparison and offer advisory tools."""

__version__ = "0.3.0"
