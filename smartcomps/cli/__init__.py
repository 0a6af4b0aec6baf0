"""SmartComps command-line interface."""
