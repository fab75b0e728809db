"""Domain apps of the hotel booking project."""
