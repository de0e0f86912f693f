"""Pure dashboard algorithms: tides, radar, text layout, moon."""
