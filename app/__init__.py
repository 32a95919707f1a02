"""Gobblet AI service: perfect-play move selection over HTTP."""
