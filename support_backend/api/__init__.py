"""HTTP API for the chat/voice widget."""
