"""GitHub API access for the feed builder."""
