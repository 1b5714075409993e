"""Collaborators that talk to the hosting API and the git binary."""
