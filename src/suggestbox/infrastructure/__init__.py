"""Infrastructure layer: collaborators that talk to the outside world."""
