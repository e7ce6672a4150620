"""HTTP and WebSocket front end for watching and replaying judged runs."""
