"""NiceGUI web runtime for the weather client."""
