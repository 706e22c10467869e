"""Issue-to-record pipeline."""
