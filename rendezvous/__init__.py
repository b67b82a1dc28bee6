"""WebRTC rendezvous and signaling relay service."""
