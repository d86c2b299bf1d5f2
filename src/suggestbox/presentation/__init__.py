"""Presentation layer: render directives and the Textual front end."""
