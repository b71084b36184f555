"""Domain contracts shared by services (model collaborator)."""
