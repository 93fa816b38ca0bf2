"""HTTP API for QTrack."""
