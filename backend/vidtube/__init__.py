"""VidTube backend."""
