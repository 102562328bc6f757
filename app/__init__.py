"""JATrackr API."""
