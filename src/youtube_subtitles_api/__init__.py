"""HTTP API for fetching and translating YouTube subtitles."""
