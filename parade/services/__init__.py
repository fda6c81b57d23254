"""Supporting services: text rendering and table setup."""
