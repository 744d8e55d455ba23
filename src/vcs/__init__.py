"""Resolution of VCS source dependencies to pinned commits."""
