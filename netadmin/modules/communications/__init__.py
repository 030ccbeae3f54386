"""Communications module: broadcast messages and audience targeting."""
