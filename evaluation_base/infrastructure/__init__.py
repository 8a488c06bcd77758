"""Infrastructure — logging setup and deployment wiring (imports, filesystem)."""
